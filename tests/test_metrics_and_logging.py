"""Metrics counters and structured reactor event logging."""

import logging

from sentinel.core import logging_utils
from sentinel.core.metrics import Metrics
from sentinel.reactor.events import LoginEvent, NewTradeEvent, WebSessionJoinEvent

from conftest import FakeOffer


class TestMetrics:
    def test_event_counts(self):
        m = Metrics()
        assert m.inc_event("OnLogin", ts=10.0) == 1
        assert m.inc_event("OnLogin") == 2
        m.inc_event("OnTradeFailed", ts=12.0)
        assert m.event_counts() == {"OnLogin": 2, "OnTradeFailed": 1}
        assert m.last_event_ts == 12.0

    def test_auth_retries(self):
        m = Metrics()
        m.inc_auth_retry()
        assert m.auth_retries == 1

    def test_log_snapshot(self, caplog):
        m = Metrics()
        m.inc_event("OnLogin")
        with caplog.at_level(logging.INFO, logger="sentinel.core.metrics"):
            m.log_snapshot()
        assert "metrics auth_retries=0 OnLogin=1" in caplog.text


class TestLogReactorEvent:
    def test_offer_logged_without_manager(self, caplog):
        offer = FakeOffer(offer_id="55")
        with caplog.at_level(logging.DEBUG, logger="sentinel.core.logging_utils"):
            logging_utils.log_reactor_event(NewTradeEvent(offer=offer), trace_id="abc")
        assert "reactor_event" in caplog.text
        assert "event=OnNewTrade" in caplog.text
        assert "trace_id=abc" in caplog.text
        assert "_manager" not in caplog.text
        assert "'id': '55'" in caplog.text

    def test_cookies_are_redacted(self, caplog):
        event = WebSessionJoinEvent(sessionid="sess-1", cookies=["steamLoginSecure=secret", "sessionid=abc"])
        with caplog.at_level(logging.DEBUG, logger="sentinel.core.logging_utils"):
            logging_utils.log_reactor_event(event)
        assert "cookies=2" in caplog.text
        assert "steamLoginSecure" not in caplog.text
        assert "sessionid=sess-1" in caplog.text

    def test_event_without_payload(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="sentinel.core.logging_utils"):
            logging_utils.log_reactor_event(LoginEvent())
        assert "event=OnLogin" in caplog.text

    def test_message_builders(self):
        assert logging_utils.trade_failed("9") == "Trade offer #9 failed"
        assert logging_utils.web_session_join(["a", "b"]) == "Joined web session with 2 cookies"
