"""Pytest fixtures for Sentinel tests: fake Steam session, trade manager and offers."""

import sys
from pathlib import Path
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest
from eventkit import Event

# Ensure project root is in path for sentinel imports
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from sentinel.config.settings import ReactorConfig, SteamCredentials  # noqa: E402
from sentinel.connector.steam import TradeOfferState  # noqa: E402
from sentinel.core.metrics import Metrics  # noqa: E402
from sentinel.reactor.steam_reactor import SteamReactor  # noqa: E402

SHARED_SECRET = "c2VjcmV0c2VjcmV0c2VjcmV0"  # base64("secretsecretsecret")
STEAMID = "76561198000000001"


class FakeSession:
    """Stands in for a Steam client session; tests fire its events directly."""

    def __init__(self, steamid: str = STEAMID):
        self.steamid = steamid
        self.error_event = Event("error")
        self.steam_guard_event = Event("steamGuard")
        self.logged_on_event = Event("loggedOn")
        self.web_session_event = Event("webSession")
        self.disconnected_event = Event("disconnected")
        self.friend_message_event = Event("friendMessage")
        self.friend_relationship_event = Event("friendRelationship")
        self.trade_request_event = Event("tradeRequest")
        self.log_on = MagicMock()
        self.set_persona = MagicMock()
        self.games_played = MagicMock()


class FakeTradeManager:
    """Trade-offer watcher; set_cookies answers immediately with cookie_error."""

    def __init__(self, session: Any):
        self.session = session
        self.new_offer_event = Event("newOffer")
        self.sent_offer_changed_event = Event("sentOfferChanged")
        self.received_offer_changed_event = Event("receivedOfferChanged")
        self.cookie_error: Optional[BaseException] = None
        self.cookies: Optional[List[str]] = None
        self.set_cookies_calls = 0

    def set_cookies(self, cookies, callback) -> None:
        self.set_cookies_calls += 1
        self.cookies = cookies
        callback(self.cookie_error)


class FakeOffer:
    """Trade offer with a _manager back-reference; exchange details answered from attributes."""

    def __init__(self, offer_id="1001", state=TradeOfferState.ACTIVE, partner="76561198000000002"):
        self.id = offer_id
        self.partner = partner
        self.state = state
        self.items_to_receive: List[dict] = []
        self.items_to_give: List[dict] = []
        self._manager = object()
        self.details_error: Optional[BaseException] = None
        self.received_details: List[dict] = []
        self.sent_details: List[dict] = []
        self.details_calls: List[bool] = []

    def get_exchange_details(self, get_details_if_failed, callback) -> None:
        self.details_calls.append(get_details_if_failed)
        callback(self.details_error, 3, 1700000000, self.received_details, self.sent_details)


@pytest.fixture
def credentials() -> SteamCredentials:
    return SteamCredentials(
        steamid=STEAMID,
        account_name="sentinel_bot",
        password="hunter2",
        shared_secret=SHARED_SECRET,
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def metrics() -> Metrics:
    return Metrics()


@pytest.fixture
def reactor_config() -> ReactorConfig:
    return ReactorConfig(auth_retry_delay_sec=0.05)


@pytest.fixture
def make_reactor(credentials, session, metrics, reactor_config):
    """Factory so tests can pick config before construction."""

    def _make(config: Optional[ReactorConfig] = None, creds: Optional[SteamCredentials] = None) -> SteamReactor:
        return SteamReactor(
            creds or credentials,
            session,
            FakeTradeManager,
            config=config or reactor_config,
            metrics=metrics,
        )

    return _make


@pytest.fixture
def reactor(make_reactor) -> SteamReactor:
    return make_reactor()


@pytest.fixture
def received():
    """(events, handler): handler appends every event it is given."""
    events: List[Any] = []

    def handler(event):
        events.append(event)

    return events, handler
