"""Outbound request bodies for the v1 websocket API."""

from __future__ import annotations

from typing import Any

from bfxws.models import ChannelKind, ChannelSubscription


def subscribe_order_book(pair: str = "BTCUSD", prec: str = "P0", length: str = "25") -> dict[str, Any]:
    """Order book subscription.

    Args:
        pair: e.g. BTCUSD, LTCUSD or LTCBTC
        prec: aggregation level P0..P3, or R0 for raw orders
        length: number of price points, "25" or "100"
    """
    return {"event": "subscribe", "channel": "book", "pair": pair, "prec": prec, "len": length}


def subscribe_trades(pair: str = "BTCUSD") -> dict[str, Any]:
    return {"event": "subscribe", "channel": "trades", "pair": pair}


def subscribe_ticker(pair: str = "BTCUSD") -> dict[str, Any]:
    return {"event": "subscribe", "channel": "ticker", "pair": pair}


def unsubscribe(chan_id: int) -> dict[str, Any]:
    return {"event": "unsubscribe", "chanId": chan_id}


def resubscribe_request(subscription: ChannelSubscription) -> dict[str, Any] | None:
    """Rebuild the subscribe request for a registry entry.

    Returns None for the auth channel, which is re-established with a fresh
    signed auth request instead.
    """
    if subscription.kind is ChannelKind.AUTH:
        return None

    cmd: dict[str, Any] = {
        "event": "subscribe",
        "channel": subscription.kind.value,
        "pair": subscription.pair,
    }
    if subscription.precision is not None:
        cmd["prec"] = subscription.precision.value
    if subscription.length is not None:
        cmd["len"] = subscription.length
    return cmd
