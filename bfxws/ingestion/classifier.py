"""Classifies parsed frames into control events or channel data.

Control frames are JSON objects carrying an ``event`` key. Channel data
frames are arrays whose first element is the channel id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson

HEARTBEAT = "hb"


@dataclass(frozen=True)
class SubscribedAck:
    message: dict


@dataclass(frozen=True)
class UnsubscribedAck:
    message: dict


@dataclass(frozen=True)
class AuthSuccess:
    message: dict


@dataclass(frozen=True)
class AuthFailure:
    message: dict


@dataclass(frozen=True)
class ControlPassthrough:
    """Any other control event (``info``, ``pong``, ``error``...)."""

    name: str
    message: dict


@dataclass(frozen=True)
class Heartbeat:
    channel_id: int


@dataclass(frozen=True)
class ChannelData:
    channel_id: int
    payload: list


@dataclass(frozen=True)
class Unrecognized:
    frame: Any


Classification = (
    SubscribedAck
    | UnsubscribedAck
    | AuthSuccess
    | AuthFailure
    | ControlPassthrough
    | Heartbeat
    | ChannelData
    | Unrecognized
)


def parse_frame(raw: str | bytes) -> Any:
    """Parse one text frame. Raises ``orjson.JSONDecodeError`` on bad input."""
    return orjson.loads(raw)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def classify(frame: Any) -> Classification:
    """Classify a parsed frame. Never mutates ``frame``."""
    if isinstance(frame, dict):
        return _classify_control(frame)

    if is_sequence(frame) and frame:
        channel_id = frame[0]
        if not isinstance(channel_id, int) or isinstance(channel_id, bool):
            return Unrecognized(frame)
        payload = list(frame[1:])
        if payload and payload[0] == HEARTBEAT:
            return Heartbeat(channel_id)
        return ChannelData(channel_id, payload)

    return Unrecognized(frame)


def _classify_control(message: dict) -> Classification:
    event = message.get("event")
    if not isinstance(event, str) or not event:
        return Unrecognized(message)

    if event == "subscribed":
        return SubscribedAck(message)
    if event == "unsubscribed":
        return UnsubscribedAck(message)
    if event == "auth":
        if message.get("status") != "OK":
            return AuthFailure(message)
        return AuthSuccess(message)
    return ControlPassthrough(event, message)
