"""Models for the authenticated account stream and frame-level errors."""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel


class UserEvent(BaseModel):
    """An account update tagged with its event type (``os``, ``ws``, ``pu``...).

    The payload shape varies by event type and is passed through untouched.
    """

    event_type: str
    data: Any

    model_config = {"frozen": True}

    def to_payload(self) -> str:
        return orjson.dumps(self.model_dump(), default=str).decode()


class FrameError(BaseModel):
    """Payload of the ``error`` event raised for a frame that could not be read."""

    reason: str
    raw: str

    model_config = {"frozen": True}
