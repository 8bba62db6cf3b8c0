"""Frame dispatcher: the single entry point for inbound websocket frames.

Frames are handled one at a time and synchronously, from parsing through
classification and decoding to listener delivery. The dispatcher owns the
channel registry; nothing else writes to it.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from typing import Any

import orjson
import structlog
from pydantic import ValidationError

from bfxws.ingestion.classifier import (
    AuthFailure,
    AuthSuccess,
    ChannelData,
    Classification,
    ControlPassthrough,
    Heartbeat,
    SubscribedAck,
    UnsubscribedAck,
    Unrecognized,
    classify,
    parse_frame,
)
from bfxws.ingestion.decoders import Batch, Snapshot, Update
from bfxws.ingestion.events import Event, EventKind, Listener
from bfxws.ingestion.registry import ChannelRegistry
from bfxws.ingestion.ws_router import CHANNEL_ROUTES
from bfxws.models import ChannelSubscription, FrameError

logger = structlog.get_logger(__name__)


class Dispatcher:
    """
    Turns raw frames into typed events for one connection at a time.

    Call ``on_open()`` when the transport connects and ``on_close()`` when it
    goes away. Frames received while closed are dropped.
    """

    def __init__(self) -> None:
        self._registry = ChannelRegistry()
        self._listeners: list[
            tuple[Listener, frozenset[EventKind] | None, frozenset[str] | None]
        ] = []
        self._open = False
        self._last_heartbeat: dict[int, float] = {}
        self._counts: dict[str, int] = {}

    # ── Listeners ─────────────────────────────────────────────────────

    def add_listener(
        self,
        listener: Listener,
        kinds: Iterable[EventKind] | None = None,
        names: Iterable[str] | None = None,
    ) -> Callable[[], None]:
        """Register a listener, optionally filtered by kind and/or name.

        Returns a callable that removes the listener again.
        """
        entry = (
            listener,
            frozenset(kinds) if kinds is not None else None,
            frozenset(names) if names is not None else None,
        )
        self._listeners.append(entry)

        def remove() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return remove

    def _emit(self, event: Event, emitted: list[Event]) -> None:
        emitted.append(event)
        self._counts[event.name] = self._counts.get(event.name, 0) + 1

        for listener, kinds, names in list(self._listeners):
            if kinds is not None and event.kind not in kinds:
                continue
            if names is not None and event.name not in names:
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("listener_error", name=event.name)

    # ── Connection lifecycle ──────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._open

    def on_open(self) -> list[Event]:
        """Start a new connection: forget every channel from the last one."""
        self._registry.clear()
        self._last_heartbeat.clear()
        self._open = True
        logger.info("connection_opened")
        emitted: list[Event] = []
        self._emit(Event(EventKind.OPEN, EventKind.OPEN.value), emitted)
        return emitted

    def on_close(self) -> list[Event]:
        self._open = False
        self._registry.clear()
        self._last_heartbeat.clear()
        logger.info("connection_closed")
        emitted: list[Event] = []
        self._emit(Event(EventKind.CLOSE, EventKind.CLOSE.value), emitted)
        return emitted

    def on_transport_error(self, error: Exception) -> list[Event]:
        """Forward an error raised by the transport to listeners."""
        logger.error("transport_error", error=str(error))
        emitted: list[Event] = []
        self._emit(Event(EventKind.ERROR, EventKind.ERROR.value, error), emitted)
        return emitted

    # ── Registry views ────────────────────────────────────────────────

    def lookup(self, channel_id: int) -> ChannelSubscription | None:
        return self._registry.lookup(channel_id)

    @property
    def channels(self) -> list[ChannelSubscription]:
        return list(self._registry)

    def last_heartbeat(self, channel_id: int) -> float | None:
        """Monotonic time of the last heartbeat seen on a channel."""
        return self._last_heartbeat.get(channel_id)

    def pop_counts(self) -> dict[str, int]:
        """Return and reset emitted event counts (for periodic stats logging)."""
        counts = self._counts
        self._counts = {}
        return counts

    # ── Frame handling ────────────────────────────────────────────────

    def handle_raw(self, raw: str | bytes) -> list[Event]:
        """Parse a text frame and dispatch it. Returns the emitted events."""
        if not self._open:
            logger.debug("frame_dropped_while_closed")
            return []

        try:
            frame = parse_frame(raw)
        except orjson.JSONDecodeError:
            text = raw if isinstance(raw, str) else raw.decode(errors="replace")
            logger.error("invalid_json", raw=text[:200])
            emitted: list[Event] = []
            self._emit(
                Event(EventKind.ERROR, EventKind.ERROR.value, FrameError(reason="invalid_json", raw=text)),
                emitted,
            )
            return emitted

        return self.handle_frame(frame)

    def handle_frame(self, frame: Any) -> list[Event]:
        """Dispatch an already parsed frame. Returns the emitted events."""
        if not self._open:
            logger.debug("frame_dropped_while_closed")
            return []

        emitted: list[Event] = []
        self._emit(Event(EventKind.MESSAGE, EventKind.MESSAGE.value, frame), emitted)
        self._route(classify(frame), emitted)
        return emitted

    def _route(self, classification: Classification, emitted: list[Event]) -> None:
        if isinstance(classification, ChannelData):
            self._handle_channel(classification.channel_id, classification.payload, emitted)
        elif isinstance(classification, Heartbeat):
            self._handle_heartbeat(classification.channel_id)
        elif isinstance(classification, SubscribedAck):
            self._handle_subscribed(classification.message)
            self._emit(Event(EventKind.CONTROL, "subscribed", classification.message), emitted)
        elif isinstance(classification, UnsubscribedAck):
            self._handle_unsubscribed(classification.message)
            self._emit(Event(EventKind.CONTROL, "unsubscribed", classification.message), emitted)
        elif isinstance(classification, AuthFailure):
            logger.error("auth_failed", msg=classification.message)
            self._emit(
                Event(EventKind.ERROR, EventKind.ERROR.value, classification.message), emitted
            )
        elif isinstance(classification, AuthSuccess):
            self._handle_auth(classification.message)
            self._emit(Event(EventKind.CONTROL, "auth", classification.message), emitted)
        elif isinstance(classification, ControlPassthrough):
            name = classification.name
            kind = EventKind.ERROR if name == EventKind.ERROR.value else EventKind.CONTROL
            self._emit(Event(kind, name, classification.message), emitted)
        elif isinstance(classification, Unrecognized):
            logger.debug("unrecognized_frame", frame=classification.frame)

    # ── Control handlers ──────────────────────────────────────────────

    def _handle_subscribed(self, message: dict) -> None:
        try:
            subscription = ChannelSubscription.model_validate(message)
        except ValidationError:
            logger.warning("unsupported_subscription", msg=message)
            return

        self._registry.register(subscription.channel_id, subscription)
        logger.info(
            "channel_registered",
            channel_id=subscription.channel_id,
            channel=subscription.kind.value,
            pair=subscription.pair,
        )

    def _handle_unsubscribed(self, message: dict) -> None:
        if message.get("status", "OK") != "OK":
            logger.warning("unsubscribe_failed", msg=message)
            return

        channel_id = message.get("chanId")
        if isinstance(channel_id, int):
            self._registry.unregister(channel_id)
            self._last_heartbeat.pop(channel_id, None)
            logger.info("channel_unregistered", channel_id=channel_id)

    def _handle_auth(self, message: dict) -> None:
        try:
            subscription = ChannelSubscription.for_auth(message.get("chanId", 0))
        except ValidationError:
            logger.warning("unsupported_auth_ack", msg=message)
            return

        self._registry.register(subscription.channel_id, subscription)
        logger.info("auth_channel_registered", channel_id=subscription.channel_id)

    # ── Channel data ──────────────────────────────────────────────────

    def _handle_heartbeat(self, channel_id: int) -> None:
        subscription = self._registry.lookup(channel_id)
        if subscription is None:
            return
        self._last_heartbeat[channel_id] = time.monotonic()
        logger.debug(
            "heartbeat",
            channel_id=channel_id,
            channel=subscription.kind.value,
            pair=subscription.pair,
        )

    def _handle_channel(self, channel_id: int, payload: list, emitted: list[Event]) -> None:
        subscription = self._registry.lookup(channel_id)
        if subscription is None:
            # Data may arrive before its subscription ack
            logger.debug("unknown_channel", channel_id=channel_id)
            return

        decoder, kind = CHANNEL_ROUTES[subscription.kind]
        try:
            result = decoder(payload, subscription)
        except ValidationError:
            logger.warning(
                "channel_decode_error",
                channel_id=channel_id,
                channel=subscription.kind.value,
                payload=payload,
            )
            return

        if isinstance(result, Snapshot):
            self._emit(Event(kind, kind.value, list(result.entries), subscription.pair), emitted)
        elif isinstance(result, Update):
            name = self._event_name(kind, result.entry)
            self._emit(Event(kind, name, result.entry, subscription.pair), emitted)
        elif isinstance(result, Batch):
            for entry in result.entries:
                name = self._event_name(kind, entry)
                self._emit(Event(kind, name, entry, subscription.pair), emitted)
        else:
            logger.debug(
                "unrecognized_payload",
                channel_id=channel_id,
                channel=subscription.kind.value,
            )

    @staticmethod
    def _event_name(kind: EventKind, entry: Any) -> str:
        if kind is EventKind.USER:
            return entry.event_type
        return kind.value
