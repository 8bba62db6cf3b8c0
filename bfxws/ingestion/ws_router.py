"""Routes channel data to a decoder and an outbound event kind by channel kind."""

from __future__ import annotations

from collections.abc import Callable

from bfxws.ingestion.decoders import (
    DecodeResult,
    decode_book,
    decode_ticker,
    decode_trades,
    decode_user,
)
from bfxws.ingestion.events import EventKind
from bfxws.models import ChannelKind, ChannelSubscription

Decoder = Callable[[list, ChannelSubscription], DecodeResult]

# Channel kind → (decoder, event kind emitted for its results)
CHANNEL_ROUTES: dict[ChannelKind, tuple[Decoder, EventKind]] = {
    ChannelKind.BOOK: (decode_book, EventKind.ORDERBOOK),
    ChannelKind.TRADES: (decode_trades, EventKind.TRADE),
    ChannelKind.TICKER: (decode_ticker, EventKind.TICKER),
    ChannelKind.AUTH: (decode_user, EventKind.USER),
}
