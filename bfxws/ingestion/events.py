"""Outbound event envelope delivered to dispatcher listeners."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventKind(str, Enum):
    MESSAGE = "message"
    OPEN = "open"
    CLOSE = "close"
    ERROR = "error"
    ORDERBOOK = "orderbook"
    TRADE = "trade"
    TICKER = "ticker"
    USER = "user"
    CONTROL = "control"


@dataclass(frozen=True)
class Event:
    """A single emission.

    ``name`` equals ``kind.value`` except for USER events, named after the
    account event type (``os``, ``ws``...), and CONTROL events, named after
    the server's ``event`` field (``subscribed``, ``info``...).
    """

    kind: EventKind
    name: str
    payload: Any = None
    pair: str | None = None


Listener = Callable[[Event], None]
