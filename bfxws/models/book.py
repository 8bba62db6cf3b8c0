"""Pydantic models for order book levels from the 'book' channel."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar, Literal

import orjson
from pydantic import BaseModel


class AggregatedBookLevel(BaseModel):
    """A price level in an aggregated book (precision P0..P3).

    ``amount`` is signed: positive for bids, negative for asks.
    A ``count`` of 0 means the level was removed.
    """

    FIELDS: ClassVar[tuple[str, ...]] = ("price", "count", "amount")

    price: float
    count: int
    amount: float

    model_config = {"frozen": True}

    @classmethod
    def from_fields(cls, fields: Sequence) -> AggregatedBookLevel:
        return cls.model_validate(dict(zip(cls.FIELDS, fields)))

    @property
    def side(self) -> Literal["bid", "ask"]:
        return "bid" if self.amount > 0 else "ask"

    @property
    def is_removal(self) -> bool:
        return self.count == 0

    def to_payload(self) -> str:
        return orjson.dumps(self.model_dump()).decode()


class RawBookLevel(BaseModel):
    """A single order in a raw book (precision R0)."""

    FIELDS: ClassVar[tuple[str, ...]] = ("order_id", "price", "amount")

    order_id: int
    price: float
    amount: float

    model_config = {"frozen": True}

    @classmethod
    def from_fields(cls, fields: Sequence) -> RawBookLevel:
        return cls.model_validate(dict(zip(cls.FIELDS, fields)))

    @property
    def side(self) -> Literal["bid", "ask"]:
        return "bid" if self.amount > 0 else "ask"

    def to_payload(self) -> str:
        return orjson.dumps(self.model_dump()).decode()


BookLevel = AggregatedBookLevel | RawBookLevel
