"""Steam reactor: session / trade-offer events as domain events."""

from sentinel.reactor.events import (
    ChatMessageEvent,
    ErrorEvent,
    FriendRequestEvent,
    IncomingTradeCompletedEvent,
    LoginEvent,
    LogoutEvent,
    NewTradeEvent,
    ReactorEvent,
    ReactorEventKind,
    SentTradeCompletedEvent,
    TradeFailedEvent,
    TradeOfferEvent,
    TradeSentEvent,
    WebSessionJoinEvent,
)
from sentinel.reactor.util import AcceptedTradeOffer, populate_exchange_details, serialise_data
from sentinel.reactor.steam_reactor import SteamReactor

__all__ = [
    "SteamReactor",
    "ReactorEvent",
    "ReactorEventKind",
    "ErrorEvent",
    "LoginEvent",
    "WebSessionJoinEvent",
    "LogoutEvent",
    "ChatMessageEvent",
    "FriendRequestEvent",
    "TradeOfferEvent",
    "NewTradeEvent",
    "TradeSentEvent",
    "SentTradeCompletedEvent",
    "IncomingTradeCompletedEvent",
    "TradeFailedEvent",
    "AcceptedTradeOffer",
    "populate_exchange_details",
    "serialise_data",
]
