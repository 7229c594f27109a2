"""Log message builders for reactor activity and structured event logging."""

import logging
import uuid
from typing import Any, List, Optional

from sentinel.reactor.events import ReactorEvent
from sentinel.reactor.util import serialise_data

logger = logging.getLogger(__name__)


def logged_in(steamid: Any) -> str:
    return f"Logged into Steam as {steamid}"


def awaiting_steam_guard(steamid: Any) -> str:
    return f"Awaiting Steam Guard code for {steamid}"


def web_session_join(cookies: List[str]) -> str:
    return f"Joined web session with {len(cookies or [])} cookies"


def logged_out(steamid: Any) -> str:
    return f"Logged out of Steam as {steamid}"


def received_message_from(steamid: str, message: str) -> str:
    return f"Received message from {steamid}: {message}"


def received_friend_request_from(steamid: str) -> str:
    return f"Received friend request from {steamid}"


def received_offer_from(partner: Any, offer_id: Any) -> str:
    return f"Received offer #{offer_id} from {partner}"


def sent_offer_to(partner: Any, offer_id: Any) -> str:
    return f"Sent offer #{offer_id} to {partner}"


def trade_completed(offer_id: Any) -> str:
    return f"Trade offer #{offer_id} completed"


def trade_failed(offer_id: Any) -> str:
    return f"Trade offer #{offer_id} failed"


def log_reactor_event(
    event: ReactorEvent,
    trace_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> None:
    """Log a reactor event as key-value at DEBUG. Payload goes through serialise_data."""
    extra = dict(extra or {})
    extra["trace_id"] = trace_id or str(uuid.uuid4())[:8]
    extra["event"] = event.kind.value
    payload = serialise_data(event)
    if payload:
        extra.update(payload)
    if "cookies" in extra:
        # Session cookies are credentials; only the count is logged.
        extra["cookies"] = len(extra["cookies"] or [])
    msg = "reactor_event " + " ".join(f"{k}={v}" for k, v in sorted(extra.items()))
    logger.debug(msg)
