"""Status server endpoints against a live reactor with fake session."""

from fastapi.testclient import TestClient

from sentinel.status_server.app import create_app


def test_status_reflects_reactor(reactor, session, metrics):
    client = TestClient(create_app(reactor, metrics))

    body = client.get("/status").json()
    assert body["online"] is False
    assert body["last_event_ts"] is None

    session.logged_on_event.emit()
    session.web_session_event.emit("sess-1", ["a=1"])

    body = client.get("/status").json()
    assert body["steamid"] == reactor.steamid
    assert body["online"] is True
    assert body["trade_listeners_attached"] is True
    assert body["seconds_since_last_event"] >= 0


def test_events_counts(reactor, session, metrics):
    client = TestClient(create_app(reactor, metrics))
    session.logged_on_event.emit()
    session.disconnected_event.emit(3, "NoConnection")
    assert client.get("/events").json() == {"events": {"OnLogin": 1, "OnLogout": 1}}
