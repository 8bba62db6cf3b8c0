"""Pydantic model for trades from the 'trades' websocket channel."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

import orjson
from pydantic import BaseModel, Field


class TradeEvent(BaseModel):
    """A trade execution, or a correction of one when ``id`` is set.

    ``seq`` is an opaque identifier and is kept exactly as received: a
    snapshot carries it as a number, ``te``/``tu`` updates as a string.
    """

    SNAPSHOT_FIELDS: ClassVar[tuple[str, ...]] = ("seq", "timestamp", "price", "amount")
    EXECUTED_FIELDS: ClassVar[tuple[str, ...]] = ("seq", "timestamp", "price", "amount")
    UPDATED_FIELDS: ClassVar[tuple[str, ...]] = ("seq", "id", "timestamp", "price", "amount")

    seq: str | int
    id: str | int | None = None
    timestamp: float = Field(description="Unix timestamp in seconds")
    price: float
    amount: float

    model_config = {"frozen": True}

    @classmethod
    def from_fields(cls, names: tuple[str, ...], fields: Sequence) -> TradeEvent:
        return cls.model_validate(dict(zip(names, fields)))

    @property
    def is_correction(self) -> bool:
        return self.id is not None

    def to_payload(self) -> str:
        """Return a JSON string, omitting ``id`` for executions."""
        return orjson.dumps(self.model_dump(exclude_none=True)).decode()
