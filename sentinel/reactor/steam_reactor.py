"""SteamReactor: owns one Steam session and republishes its events as domain events."""

import asyncio
import logging
import random
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Type

from eventkit import Event

from sentinel.config.settings import ReactorConfig, SteamCredentials
from sentinel.connector.guard import generate_auth_code
from sentinel.connector.steam import (
    EFriendRelationship,
    SteamSession,
    TradeManagerFactory,
    TradeOffer,
    TradeOfferState,
    TradeOfferWatcher,
)
from sentinel.core import logging_utils as log_msg
from sentinel.core.metrics import Metrics, get_metrics
from sentinel.reactor.events import (
    ChatMessageEvent,
    ErrorEvent,
    FriendRequestEvent,
    IncomingTradeCompletedEvent,
    LoginEvent,
    LogoutEvent,
    NewTradeEvent,
    ReactorEvent,
    SentTradeCompletedEvent,
    TradeFailedEvent,
    TradeOfferEvent,
    TradeSentEvent,
    WebSessionJoinEvent,
)

logger = logging.getLogger(__name__)

_LOGON_ID_RANGE = 2 ** 16

# Outbound and inbound cases differ: Canceled is inbound only,
# CanceledBySecondFactor and Countered are outbound only.
SENT_OFFER_DISPATCH: Dict[TradeOfferState, Type[TradeOfferEvent]] = {
    TradeOfferState.ACTIVE: TradeSentEvent,
    TradeOfferState.ACCEPTED: SentTradeCompletedEvent,
    TradeOfferState.INVALID_ITEMS: TradeFailedEvent,
    TradeOfferState.DECLINED: TradeFailedEvent,
    TradeOfferState.EXPIRED: TradeFailedEvent,
    TradeOfferState.CANCELED_BY_SECOND_FACTOR: TradeFailedEvent,
    TradeOfferState.COUNTERED: NewTradeEvent,
}

RECEIVED_OFFER_DISPATCH: Dict[TradeOfferState, Type[TradeOfferEvent]] = {
    TradeOfferState.ACTIVE: NewTradeEvent,
    TradeOfferState.ACCEPTED: IncomingTradeCompletedEvent,
    TradeOfferState.DECLINED: TradeFailedEvent,
    TradeOfferState.EXPIRED: TradeFailedEvent,
    TradeOfferState.CANCELED: TradeFailedEvent,
    TradeOfferState.INVALID_ITEMS: TradeFailedEvent,
}


class SteamReactor:
    """Logs into Steam on construction and translates session / trade-offer events.

    Subscribe with ``reactor.events += handler`` for every event, or
    ``reactor.subscribe(TradeFailedEvent, handler)`` for one kind.
    """

    def __init__(
        self,
        credentials: SteamCredentials,
        session: SteamSession,
        trade_manager_factory: TradeManagerFactory,
        config: Optional[ReactorConfig] = None,
        metrics: Optional[Metrics] = None,
    ):
        self.config = config or ReactorConfig()
        self.steamid = credentials.steamid
        self.shared_secret = credentials.shared_secret
        self.playing_game_name = credentials.playing_game_name or self.config.playing_game_name

        self.user = session
        self.user_online = False
        self.trade_listeners_attached = False
        self.events = Event("SteamReactor")
        self._channels: Dict[Type[ReactorEvent], Event] = {}
        self._metrics = metrics or get_metrics()

        # Listeners before logon so nothing is missed.
        self._hook_onto_steam_user_listeners()
        logon_id = credentials.logon_id
        if logon_id is None:
            logon_id = random.randrange(_LOGON_ID_RANGE)
        self.user.log_on(
            {
                "account_name": credentials.account_name,
                "password": credentials.password,
                "two_factor_code": generate_auth_code(credentials.shared_secret),
                "logon_id": logon_id,
            }
        )

        self.trade_manager: TradeOfferWatcher = trade_manager_factory(self.user)

    # --- subscription ---

    def subscribe(self, event_type: Type[ReactorEvent], handler: Callable[[Any], Any]) -> None:
        """Call handler(event) for every event of exactly this type."""
        channel = self._channels.get(event_type)
        if channel is None:
            channel = Event(event_type.__name__)
            self._channels[event_type] = channel
        channel.connect(handler)

    def unsubscribe(self, event_type: Type[ReactorEvent], handler: Callable[[Any], Any]) -> None:
        channel = self._channels.get(event_type)
        if channel is not None:
            channel.disconnect(handler)

    def _emit(self, event: ReactorEvent) -> None:
        self._metrics.inc_event(event.kind.value, time.time())
        log_msg.log_reactor_event(event)
        self.events.emit(event)
        channel = self._channels.get(type(event))
        if channel is not None:
            channel.emit(event)

    # --- session listeners ---

    def _hook_onto_steam_user_listeners(self) -> None:
        user = self.user
        # Strong refs: the session is what keeps an unreferenced reactor alive.
        user.error_event.connect(self._on_error, keep_ref=True)
        user.steam_guard_event.connect(self._on_steam_guard, keep_ref=True)
        user.logged_on_event.connect(self._on_logged_on, keep_ref=True)
        user.web_session_event.connect(self._on_web_session, keep_ref=True)
        user.disconnected_event.connect(self._on_disconnected, keep_ref=True)
        user.friend_message_event.connect(self._on_friend_message, keep_ref=True)
        user.friend_relationship_event.connect(self._on_friend_relationship, keep_ref=True)
        # Live trade requests are always rejected; only trade offers are handled.
        user.trade_request_event.connect(self._on_trade_request, keep_ref=True)

    def _on_error(self, error: BaseException) -> None:
        logger.error("Received steam session error %s", error)
        self._emit(ErrorEvent(error=error))

    def _on_steam_guard(self, domain: Any, callback: Callable[[str], Any], last_code_wrong: bool) -> None:
        self.user_online = False
        logger.info(log_msg.awaiting_steam_guard(self.steamid))
        if last_code_wrong:
            logger.warning("Last Steam Guard code was rejected (domain=%s)", domain)
        self._schedule_auth_retry(callback)

    def _schedule_auth_retry(self, callback: Callable[[str], Any]) -> None:
        """Wait for the next code window, then answer unless a logon succeeded meanwhile."""
        delay = self.config.auth_retry_delay_sec
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(delay, self._retry_auth_code, args=(callback,))
            timer.daemon = True
            timer.start()
        else:
            loop.call_later(delay, self._retry_auth_code, callback)

    def _retry_auth_code(self, callback: Callable[[str], Any]) -> None:
        if self.user_online:
            logger.debug("Skipping Steam Guard retry for %s: already online", self.steamid)
            return
        self._metrics.inc_auth_retry()
        logger.info("Submitting fresh Steam Guard code for %s", self.steamid)
        callback(generate_auth_code(self.shared_secret))

    def _on_logged_on(self, *args: Any) -> None:
        self.user_online = True
        self._emit(LoginEvent())
        self.user.set_persona(self.config.persona_state)
        self.user.games_played([self.playing_game_name])
        logger.info(log_msg.logged_in(self.steamid))

    def _on_web_session(self, sessionid: str, cookies: List[str]) -> None:
        self._emit(WebSessionJoinEvent(sessionid=sessionid, cookies=list(cookies or [])))
        logger.info(log_msg.web_session_join(cookies))

        if self.config.test_mode:
            self._hook_onto_steam_trade_listeners()
            return
        self.trade_manager.set_cookies(cookies, self._on_cookies_set)

    def _on_cookies_set(self, error: Optional[BaseException]) -> None:
        if error:
            logger.error("Failed to set cookies %s", error)
            self._emit(ErrorEvent(error=error))
            return
        self._hook_onto_steam_trade_listeners()

    def _on_disconnected(self, eresult: int, msg: Optional[str] = None) -> None:
        self._emit(LogoutEvent(eresult=eresult, msg=msg))
        logger.warning(log_msg.logged_out(getattr(self.user, "steamid", self.steamid)))

    def _on_friend_message(self, sender: Any, message: str) -> None:
        steamid = str(sender)
        self._emit(ChatMessageEvent(steamid=steamid, message=message))
        logger.info(log_msg.received_message_from(steamid, message))

    def _on_friend_relationship(self, sender: Any, relationship: int) -> None:
        steamid = str(sender)
        if relationship == EFriendRelationship.REQUEST_RECIPIENT:
            self._emit(FriendRequestEvent(steamid=steamid))
            logger.info(log_msg.received_friend_request_from(steamid))
        else:
            logger.warning("Admin has added a friend themselves (%s, relationship=%s)", steamid, relationship)

    def _on_trade_request(self, sender: Any, respond: Callable[[bool], Any]) -> None:
        logger.info("Declining live trade request from %s", sender)
        respond(False)

    # --- trade listeners ---

    def _hook_onto_steam_trade_listeners(self) -> None:
        if self.trade_listeners_attached:
            logger.debug("Trade listeners already attached for %s", self.steamid)
            return
        tm = self.trade_manager
        tm.new_offer_event.connect(self._on_new_offer, keep_ref=True)
        tm.sent_offer_changed_event.connect(self._on_sent_offer_changed, keep_ref=True)
        tm.received_offer_changed_event.connect(self._on_received_offer_changed, keep_ref=True)
        self.trade_listeners_attached = True

    def _on_new_offer(self, offer: TradeOffer) -> None:
        logger.info(log_msg.received_offer_from(offer.partner, offer.id))
        self._emit(NewTradeEvent(offer=offer))

    def _on_sent_offer_changed(self, offer: TradeOffer, old_state: Any = None) -> None:
        event_type = SENT_OFFER_DISPATCH.get(offer.state)
        if event_type is None:
            logger.debug("Sent offer %s moved to %s; nothing to emit", offer.id, offer.state)
            return
        self._log_offer_transition(event_type, offer, outbound=True)
        self._emit(event_type(offer=offer))

    def _on_received_offer_changed(self, offer: TradeOffer, old_state: Any = None) -> None:
        event_type = RECEIVED_OFFER_DISPATCH.get(offer.state)
        if event_type is None:
            logger.debug("Received offer %s moved to %s; nothing to emit", offer.id, offer.state)
            return
        self._log_offer_transition(event_type, offer, outbound=False)
        self._emit(event_type(offer=offer))

    @staticmethod
    def _log_offer_transition(event_type: Type[TradeOfferEvent], offer: TradeOffer, outbound: bool) -> None:
        if event_type is TradeSentEvent:
            logger.info(log_msg.sent_offer_to(offer.partner, offer.id))
        elif event_type in (SentTradeCompletedEvent, IncomingTradeCompletedEvent):
            logger.info(log_msg.trade_completed(offer.id))
        elif event_type is TradeFailedEvent:
            logger.warning(log_msg.trade_failed(offer.id))
        elif outbound:
            # Countered: the counter-offer arrives as a new proposal.
            logger.warning(log_msg.received_offer_from(offer.partner, offer.id))
        else:
            logger.info(log_msg.received_offer_from(offer.partner, offer.id))
