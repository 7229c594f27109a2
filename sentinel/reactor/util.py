"""Payload sanitizing for logs and exchange-detail population for completed trades."""

import asyncio
import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, TypedDict

from sentinel.connector.steam import TradeOffer

logger = logging.getLogger(__name__)

_MANAGER_KEY = "_manager"


def _is_record(obj: Any) -> bool:
    return (
        isinstance(obj, Mapping)
        or (dataclasses.is_dataclass(obj) and not isinstance(obj, type))
        or hasattr(obj, "__dict__")
    )


def _shallow_dict(obj: Any) -> Dict[str, Any]:
    if isinstance(obj, Mapping):
        return dict(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    return dict(vars(obj))


def _has_manager(offer: Any) -> bool:
    if isinstance(offer, Mapping):
        return _MANAGER_KEY in offer
    return hasattr(offer, "__dict__") and _MANAGER_KEY in vars(offer)


def serialise_data(data: Any) -> Optional[Any]:
    """Return a log-safe shallow copy of an event payload.

    None -> None; mappings, dataclasses and plain objects -> shallow dict; anything
    else (str, numbers, lists) -> unchanged. An ``offer`` field carrying its
    ``_manager`` back-reference is copied one level without it; the live offer is
    left untouched. Deeper cycles are not handled.
    """
    if data is None:
        return None
    if isinstance(data, str) or not _is_record(data):
        return data

    data_copy = _shallow_dict(data)
    offer = data_copy.get("offer")
    if offer is not None and _has_manager(offer):
        offer_copy = _shallow_dict(offer)
        offer_copy.pop(_MANAGER_KEY, None)
        data_copy["offer"] = offer_copy
    return data_copy


class UpdatedEconItem(TypedDict, total=False):
    """Item record after settlement; Steam assigns new ids on the receiving side."""

    assetid: str
    new_assetid: str
    new_contextid: str
    rollback_new_assetid: str
    rollback_new_contextid: str


# Same object as the input offer once its item lists carry UpdatedEconItem fields.
AcceptedTradeOffer = TradeOffer


def _merge_items(
    items: List[Dict[str, Any]], updated: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    # Records without an assetid cannot be matched and are skipped.
    by_assetid = {str(u["assetid"]): u for u in updated or [] if "assetid" in u}
    return [
        {**item, **by_assetid.get(str(item["assetid"]), {})} if "assetid" in item else item
        for item in items
    ]


async def populate_exchange_details(offer: TradeOffer) -> AcceptedTradeOffer:
    """Fetch settled exchange details and merge them into the offer's item lists.

    Raises whatever error the exchange-details callback reports. Not safe to call
    concurrently for the same offer.
    """
    loop = asyncio.get_running_loop()
    future: "asyncio.Future[AcceptedTradeOffer]" = loop.create_future()

    def _settle(err, received_items, sent_items) -> None:
        if future.done():
            return
        if err:
            # Some libraries report plain strings; the original stays on .args.
            future.set_exception(err if isinstance(err, BaseException) else RuntimeError(err))
            return
        try:
            offer.items_to_receive = _merge_items(offer.items_to_receive, received_items)
            offer.items_to_give = _merge_items(offer.items_to_give, sent_items)
        except Exception as e:
            future.set_exception(e)
            return
        future.set_result(offer)

    def _callback(err, status, trade_init_time, received_items, sent_items) -> None:
        logger.debug(
            "Exchange details for offer %s: status=%s init_time=%s",
            getattr(offer, "id", None),
            status,
            trade_init_time,
        )
        loop.call_soon_threadsafe(_settle, err, received_items, sent_items)

    offer.get_exchange_details(False, _callback)
    return await future
