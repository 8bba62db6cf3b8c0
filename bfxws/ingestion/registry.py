"""Connection-scoped table of channel id -> subscription."""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from bfxws.models import ChannelSubscription

logger = structlog.get_logger(__name__)


class ChannelRegistry:
    """Maps the integer channel ids handed out by the server to subscriptions.

    Ids are only valid for the connection that issued them, so the table is
    cleared whenever a connection opens or closes. Registering an id twice
    overwrites the previous entry.
    """

    def __init__(self) -> None:
        self._channels: dict[int, ChannelSubscription] = {}

    def register(self, channel_id: int, subscription: ChannelSubscription) -> None:
        if channel_id in self._channels:
            logger.debug("channel_overwritten", channel_id=channel_id)
        self._channels[channel_id] = subscription

    def lookup(self, channel_id: int) -> ChannelSubscription | None:
        return self._channels.get(channel_id)

    def unregister(self, channel_id: int) -> None:
        self._channels.pop(channel_id, None)

    def clear(self) -> None:
        self._channels.clear()

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._channels

    def __len__(self) -> int:
        return len(self._channels)

    def __iter__(self) -> Iterator[ChannelSubscription]:
        return iter(list(self._channels.values()))
