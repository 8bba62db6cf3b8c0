"""Per-channel decoders turning positional payloads into typed models.

Each decoder receives the payload (the frame without its channel id) and the
channel's subscription, and returns one of:

- ``Snapshot``: a full listing, emitted as one ordered list
- ``Update``: a single incremental entry
- ``Batch``: several entries, each emitted on its own
- ``None``: a shape this channel does not know, dropped

Heartbeats are filtered out by the classifier before a decoder runs.
Building a model from a recognised shape may raise
``pydantic.ValidationError``; callers decide how to report it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from bfxws.ingestion.classifier import is_sequence
from bfxws.models import (
    AggregatedBookLevel,
    BookLevel,
    ChannelSubscription,
    RawBookLevel,
    TickerUpdate,
    TradeEvent,
    UserEvent,
)

T = TypeVar("T")

BOOK_LEVEL_FIELDS = 3
TRADE_SNAPSHOT_FIELDS = 4
TICKER_FIELDS = 10

TRADE_EXECUTED = "te"
TRADE_UPDATED = "tu"


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    entries: list[T]


@dataclass(frozen=True)
class Update(Generic[T]):
    entry: T


@dataclass(frozen=True)
class Batch(Generic[T]):
    entries: list[T]


DecodeResult = Snapshot | Update | Batch | None


def _is_snapshot(head: object, arity: int) -> bool:
    """True for a non-empty list of entries that all have ``arity`` fields."""
    return (
        is_sequence(head)
        and len(head) > 0
        and all(is_sequence(entry) and len(entry) == arity for entry in head)
    )


def decode_book(payload: list, subscription: ChannelSubscription) -> DecodeResult:
    level_cls: type[AggregatedBookLevel] | type[RawBookLevel] = (
        RawBookLevel if subscription.is_raw_book else AggregatedBookLevel
    )
    if not payload:
        return None

    head = payload[0]
    if is_sequence(head):
        if not _is_snapshot(head, BOOK_LEVEL_FIELDS):
            return None
        levels: list[BookLevel] = [level_cls.from_fields(entry) for entry in head]
        return Snapshot(levels)

    if len(payload) >= BOOK_LEVEL_FIELDS:
        return Update(level_cls.from_fields(payload[:BOOK_LEVEL_FIELDS]))
    return None


def decode_trades(payload: list, subscription: ChannelSubscription) -> DecodeResult:
    if not payload:
        return None

    head = payload[0]
    if is_sequence(head):
        if not _is_snapshot(head, TRADE_SNAPSHOT_FIELDS):
            return None
        return Snapshot(
            [TradeEvent.from_fields(TradeEvent.SNAPSHOT_FIELDS, entry) for entry in head]
        )

    if head == TRADE_EXECUTED:
        names = TradeEvent.EXECUTED_FIELDS
    elif head == TRADE_UPDATED:
        names = TradeEvent.UPDATED_FIELDS
    else:
        return None

    fields = payload[1:]
    if len(fields) < len(names):
        return None
    return Update(TradeEvent.from_fields(names, fields))


def decode_ticker(payload: list, subscription: ChannelSubscription) -> DecodeResult:
    # Shorter ticker frames are seen in the wild but carry no usable state.
    if len(payload) < TICKER_FIELDS:
        return None
    return Update(TickerUpdate.from_fields(payload[:TICKER_FIELDS]))


def decode_user(payload: list, subscription: ChannelSubscription) -> DecodeResult:
    if len(payload) < 2:
        return None

    event_type, data = payload[0], payload[1]
    if not isinstance(event_type, str) or not is_sequence(data):
        return None

    if data and is_sequence(data[0]):
        return Batch([UserEvent(event_type=event_type, data=item) for item in data[0]])
    if data:
        return Update(UserEvent(event_type=event_type, data=data))
    return None
