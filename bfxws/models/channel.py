"""Pydantic model for a channel subscription as acknowledged by the server."""

from __future__ import annotations

from enum import Enum

import orjson
from pydantic import BaseModel, Field, field_validator


class ChannelKind(str, Enum):
    BOOK = "book"
    TRADES = "trades"
    TICKER = "ticker"
    AUTH = "auth"


class Precision(str, Enum):
    """Book aggregation level. P0..P3 group by price, R0 lists raw orders."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    R0 = "R0"


class ChannelSubscription(BaseModel):
    """One entry of the channel registry.

    Built from a ``subscribed`` ack such as::

        {"event": "subscribed", "channel": "book", "chanId": 5,
         "pair": "BTCUSD", "prec": "P0", "len": "25"}

    ``pair`` is None for the auth channel, ``precision`` and ``length`` are
    only sent for book channels.
    """

    channel_id: int = Field(alias="chanId")
    kind: ChannelKind = Field(alias="channel")
    pair: str | None = None
    precision: Precision | None = Field(default=None, alias="prec")
    length: str | None = Field(default=None, alias="len")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("length", mode="before")
    @classmethod
    def _length_as_text(cls, value: object) -> object:
        # Acks carry len as "25" or 25 depending on the server version.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_raw_book(self) -> bool:
        return self.kind is ChannelKind.BOOK and self.precision is Precision.R0

    @classmethod
    def for_auth(cls, channel_id: int = 0) -> ChannelSubscription:
        return cls(channel_id=channel_id, kind=ChannelKind.AUTH)

    def to_payload(self) -> str:
        return orjson.dumps(self.model_dump(mode="json", by_alias=True)).decode()
