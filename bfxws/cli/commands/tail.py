"""bfxws tail -- Stream decoded events from a live connection.

Subscribes to the requested channels, then prints every decoded event until
the connection closes or Ctrl+C is pressed.

Example:
    bfxws tail --book BTCUSD --prec R0 --trades BTCUSD --ticker ETHUSD
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer

from bfxws.cli.display import console, format_event
from bfxws.ingestion.events import EventKind


async def _tail_async(
    book: list[str],
    trades: list[str],
    ticker: list[str],
    prec: str,
    length: str,
    auth: bool,
    raw: bool,
) -> None:
    from bfxws.config import get_config
    from bfxws.ingestion.dispatcher import Dispatcher
    from bfxws.ingestion.ws_auth import BitfinexWSAuth
    from bfxws.ingestion.ws_client import BitfinexWSManager
    from bfxws.logs import configure_logging

    config = get_config()
    configure_logging(config.logging)

    ws_auth = None
    if auth:
        if not config.bitfinex.has_credentials:
            console.print("[error]--auth needs BFX_API_KEY and BFX_API_SECRET set.[/error]")
            raise typer.Exit(code=1)
        ws_auth = BitfinexWSAuth(config.bitfinex.api_key, config.bitfinex.api_secret)

    dispatcher = Dispatcher()
    kinds = None if raw else [k for k in EventKind if k is not EventKind.MESSAGE]
    dispatcher.add_listener(lambda event: console.print(format_event(event), soft_wrap=True), kinds=kinds)

    manager = BitfinexWSManager(dispatcher, config, auth=ws_auth)
    for pair in book:
        await manager.subscribe_order_book(pair, prec, length)
    for pair in trades:
        await manager.subscribe_trades(pair)
    for pair in ticker:
        await manager.subscribe_ticker(pair)
    if ws_auth is not None:
        await manager.authenticate()

    console.print(f"[header]Connecting to[/header] {config.bitfinex.ws_url}")
    console.print("[muted]--- live tail (Ctrl+C to stop) ---[/muted]")

    try:
        await manager.run()
    finally:
        await manager.close()


def tail(
    book: Optional[List[str]] = typer.Option(None, "--book", help="Pair for an order book channel (repeatable)"),
    trades: Optional[List[str]] = typer.Option(None, "--trades", help="Pair for a trades channel (repeatable)"),
    ticker: Optional[List[str]] = typer.Option(None, "--ticker", help="Pair for a ticker channel (repeatable)"),
    prec: str = typer.Option("P0", "--prec", help="Book precision: P0, P1, P2, P3 or R0"),
    length: str = typer.Option("25", "--len", help="Book length: 25 or 100"),
    auth: bool = typer.Option(False, "--auth", help="Authenticate and stream account events"),
    raw: bool = typer.Option(False, "--raw", help="Also print every raw frame"),
) -> None:
    """Subscribe to channels and print decoded events in real time."""
    book, trades, ticker = book or [], trades or [], ticker or []
    if not (book or trades or ticker or auth):
        console.print("[error]Nothing to tail:[/error] pass --book, --trades, --ticker or --auth.")
        raise typer.Exit(code=1)

    try:
        asyncio.run(_tail_async(book, trades, ticker, prec, length, auth, raw))
    except KeyboardInterrupt:
        console.print("\n[muted]Tail stopped.[/muted]")
