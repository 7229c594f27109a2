"""Steam collaborators consumed by the reactor: session, trade-offer watcher, trade offer.

Concrete implementations live in whatever Steam client library the deployment uses;
the reactor only depends on the attributes and eventkit events listed here.
"""

from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Protocol

from eventkit import Event


class TradeOfferState(IntEnum):
    """Steam ETradeOfferState."""

    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CREATED_NEEDS_CONFIRMATION = 9
    CANCELED_BY_SECOND_FACTOR = 10
    IN_ESCROW = 11


class EPersonaState(IntEnum):
    OFFLINE = 0
    ONLINE = 1
    BUSY = 2
    AWAY = 3
    SNOOZE = 4
    LOOKING_TO_TRADE = 5
    LOOKING_TO_PLAY = 6
    INVISIBLE = 7


class EFriendRelationship(IntEnum):
    NONE = 0
    BLOCKED = 1
    REQUEST_RECIPIENT = 2
    FRIEND = 3
    REQUEST_INITIATOR = 4
    IGNORED = 5
    IGNORED_FRIEND = 6


# (err, status, trade_init_time, received_items, sent_items)
ExchangeDetailsCallback = Callable[
    [Optional[BaseException], Any, Any, List[Dict[str, Any]], List[Dict[str, Any]]], None
]


class TradeOffer(Protocol):
    """Trade offer owned by the trade-offer watcher. Items are mappings keyed by 'assetid'."""

    id: str
    partner: Any
    state: TradeOfferState
    items_to_receive: List[Dict[str, Any]]
    items_to_give: List[Dict[str, Any]]

    def get_exchange_details(
        self, get_details_if_failed: bool, callback: ExchangeDetailsCallback
    ) -> None: ...


class SteamSession(Protocol):
    """Authenticated Steam client session.

    Event signatures:
        error_event(error)
        steam_guard_event(domain, callback, last_code_wrong)   callback(code: str)
        logged_on_event()
        web_session_event(sessionid, cookies)
        disconnected_event(eresult, msg)
        friend_message_event(sender, message)
        friend_relationship_event(sender, relationship)
        trade_request_event(sender, respond)                   respond(accept: bool)
    """

    steamid: Any

    error_event: Event
    steam_guard_event: Event
    logged_on_event: Event
    web_session_event: Event
    disconnected_event: Event
    friend_message_event: Event
    friend_relationship_event: Event
    trade_request_event: Event

    def log_on(self, details: Dict[str, Any]) -> None: ...

    def set_persona(self, state: EPersonaState) -> None: ...

    def games_played(self, games: List[str]) -> None: ...


class TradeOfferWatcher(Protocol):
    """Trade-offer poller bound to a session.

    Event signatures:
        new_offer_event(offer)
        sent_offer_changed_event(offer, old_state)
        received_offer_changed_event(offer, old_state)
    """

    new_offer_event: Event
    sent_offer_changed_event: Event
    received_offer_changed_event: Event

    def set_cookies(
        self, cookies: List[str], callback: Callable[[Optional[BaseException]], None]
    ) -> None: ...


TradeManagerFactory = Callable[[SteamSession], TradeOfferWatcher]
