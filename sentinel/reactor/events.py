"""Domain events emitted by SteamReactor. One dataclass per event kind."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Optional


class ReactorEventKind(str, Enum):
    """External event vocabulary."""

    ON_ERROR = "OnError"
    ON_LOGIN = "OnLogin"
    ON_WEB_SESSION_JOIN = "OnWebSessionJoin"
    ON_LOGOUT = "OnLogout"
    ON_CHAT_MESSAGE = "OnChatMessage"
    ON_FRIEND_REQUEST = "OnFriendRequest"
    ON_NEW_TRADE = "OnNewTrade"
    ON_TRADE_SENT = "OnTradeSent"
    ON_SENT_TRADE_COMPLETED = "OnSentTradeCompleted"
    ON_INCOMING_TRADE_COMPLETED = "OnIncomingTradeCompleted"
    ON_TRADE_FAILED = "OnTradeFailed"


@dataclass(frozen=True)
class ReactorEvent:
    """Base for all reactor events; `kind` tags the variant."""

    kind: ClassVar[ReactorEventKind]


@dataclass(frozen=True)
class ErrorEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_ERROR

    error: BaseException


@dataclass(frozen=True)
class LoginEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_LOGIN


@dataclass(frozen=True)
class WebSessionJoinEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_WEB_SESSION_JOIN

    sessionid: str
    cookies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LogoutEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_LOGOUT

    eresult: int
    msg: Optional[str] = None


@dataclass(frozen=True)
class ChatMessageEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_CHAT_MESSAGE

    steamid: str
    message: str


@dataclass(frozen=True)
class FriendRequestEvent(ReactorEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_FRIEND_REQUEST

    steamid: str


@dataclass(frozen=True)
class TradeOfferEvent(ReactorEvent):
    """Base for events carrying a trade offer."""

    offer: Any


@dataclass(frozen=True)
class NewTradeEvent(TradeOfferEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_NEW_TRADE


@dataclass(frozen=True)
class TradeSentEvent(TradeOfferEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_TRADE_SENT


@dataclass(frozen=True)
class SentTradeCompletedEvent(TradeOfferEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_SENT_TRADE_COMPLETED


@dataclass(frozen=True)
class IncomingTradeCompletedEvent(TradeOfferEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_INCOMING_TRADE_COMPLETED


@dataclass(frozen=True)
class TradeFailedEvent(TradeOfferEvent):
    kind: ClassVar[ReactorEventKind] = ReactorEventKind.ON_TRADE_FAILED
