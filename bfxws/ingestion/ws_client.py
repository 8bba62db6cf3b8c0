"""Bitfinex WebSocket connection manager, the transport side of ingestion.

Owns one websocket connection, sends subscribe/auth requests, and feeds every
inbound frame to the Dispatcher in arrival order. Reconnecting is left to the
caller: ``run()`` returns once the socket closes.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import orjson
import structlog
import websockets
import websockets.asyncio.client

from bfxws.config import AppConfig, get_config
from bfxws.ingestion import commands
from bfxws.ingestion.dispatcher import Dispatcher
from bfxws.ingestion.ws_auth import BitfinexWSAuth
from bfxws.logs import configure_logging

logger = structlog.get_logger(__name__)


class BitfinexWSManager:
    """
    Manages a single WebSocket connection to Bitfinex.

    Requests issued before the connection is up are queued and sent as soon
    as it opens.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        config: AppConfig,
        auth: BitfinexWSAuth | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._config = config
        self._auth = auth

        self._ws: websockets.asyncio.client.ClientConnection | None = None
        self._pending: list[dict[str, Any]] = []

        # Stats
        self._connect_time: float = 0
        self._last_stats_time: float = 0

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def connected(self) -> bool:
        return self._ws is not None

    # ── Connection lifecycle ──────────────────────────────────────────

    async def open(self) -> None:
        """Connect, reset the dispatcher for the new connection, flush queued requests."""
        url = self._config.bitfinex.ws_url
        try:
            self._ws = await websockets.asyncio.client.connect(
                url,
                ping_interval=self._config.tuning.ws_ping_interval,
                ping_timeout=self._config.tuning.ws_pong_timeout,
                max_size=self._config.tuning.ws_max_message_size,
            )
        except (OSError, websockets.InvalidHandshake) as e:
            logger.error("websocket_connection_error", url=url, error=str(e))
            self._dispatcher.on_transport_error(e)
            raise

        self._connect_time = time.time()
        logger.info("websocket_connected", url=url)
        self._dispatcher.on_open()

        pending, self._pending = self._pending, []
        for cmd in pending:
            await self.send(cmd)

    async def run(self) -> None:
        """Open the connection and process frames until it closes."""
        if self._ws is None:
            await self.open()

        try:
            await self._message_loop()
        except websockets.ConnectionClosedError as e:
            logger.warning("websocket_disconnected", reason=str(e))
            self._dispatcher.on_transport_error(e)
        finally:
            ws, self._ws = self._ws, None
            if ws is not None:
                await ws.close()
            self._dispatcher.on_close()

    async def close(self) -> None:
        if self._ws is not None:
            await self._ws.close()

    async def send(self, cmd: dict[str, Any]) -> None:
        """Send a request now, or queue it until the connection opens."""
        if self._ws is None:
            self._pending.append(cmd)
            return

        logger.debug("sending", request=cmd.get("event"), channel=cmd.get("channel"))
        await self._ws.send(orjson.dumps(cmd).decode())

    # ── Requests ──────────────────────────────────────────────────────

    async def subscribe_order_book(
        self, pair: str = "BTCUSD", prec: str = "P0", length: str = "25"
    ) -> None:
        await self.send(commands.subscribe_order_book(pair, prec, length))

    async def subscribe_trades(self, pair: str = "BTCUSD") -> None:
        await self.send(commands.subscribe_trades(pair))

    async def subscribe_ticker(self, pair: str = "BTCUSD") -> None:
        await self.send(commands.subscribe_ticker(pair))

    async def unsubscribe(self, chan_id: int) -> None:
        await self.send(commands.unsubscribe(chan_id))

    async def authenticate(self) -> None:
        """Authenticate to receive account updates on the auth channel."""
        if self._auth is None:
            raise RuntimeError("No API credentials configured")
        await self.send(self._auth.create_auth_request())

    # ── Message processing ────────────────────────────────────────────

    async def _message_loop(self) -> None:
        self._last_stats_time = time.time()

        async for raw in self._ws:
            self._dispatcher.handle_raw(raw)

            now = time.time()
            if now - self._last_stats_time >= self._config.tuning.stats_interval:
                self._log_stats()
                self._last_stats_time = now

    def _log_stats(self) -> None:
        uptime = time.time() - self._connect_time if self._connect_time else 0
        counts = self._dispatcher.pop_counts()

        logger.info(
            "ws_stats",
            uptime_seconds=int(uptime),
            total_events=sum(counts.values()),
            by_name=counts,
            channels=len(self._dispatcher.channels),
        )


async def main() -> None:
    """Entry point: stream the BTCUSD ticker and log every decoded update."""
    config = get_config()
    configure_logging(config.logging)

    dispatcher = Dispatcher()
    dispatcher.add_listener(
        lambda event: logger.info("ticker", pair=event.pair, update=event.payload.model_dump()),
        names=["ticker"],
    )

    manager = BitfinexWSManager(dispatcher, config)
    await manager.subscribe_ticker("BTCUSD")
    await manager.run()


if __name__ == "__main__":
    asyncio.run(main())
