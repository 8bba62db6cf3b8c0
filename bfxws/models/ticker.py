"""Pydantic model for the 'ticker' websocket channel."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

import orjson
from pydantic import BaseModel


class TickerUpdate(BaseModel):
    """A high level overview of a pair: best bid/ask, last price, daily stats.

    The server sends the ten values positionally, in field order.
    """

    FIELDS: ClassVar[tuple[str, ...]] = (
        "bid",
        "bid_size",
        "ask",
        "ask_size",
        "daily_change",
        "daily_change_perc",
        "last_price",
        "volume",
        "high",
        "low",
    )

    bid: float
    bid_size: float
    ask: float
    ask_size: float
    daily_change: float
    daily_change_perc: float
    last_price: float
    volume: float
    high: float
    low: float

    model_config = {"frozen": True}

    @classmethod
    def from_fields(cls, fields: Sequence) -> TickerUpdate:
        return cls.model_validate(dict(zip(cls.FIELDS, fields)))

    def to_payload(self) -> str:
        return orjson.dumps(self.model_dump()).decode()
