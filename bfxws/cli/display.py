"""Rich console formatting helpers for the bfxws CLI."""

from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from bfxws.ingestion.events import Event, EventKind

# Shared theme for consistent styling across all CLI output.
BFX_THEME = Theme(
    {
        "bid": "bold green",
        "ask": "bold red",
        "orderbook": "cyan",
        "trade": "bold yellow",
        "ticker": "magenta",
        "user": "bold blue",
        "control": "dim cyan",
        "error": "bold red",
        "header": "bold cyan",
        "muted": "dim",
    }
)

console = Console(theme=BFX_THEME)

_KIND_STYLES = {
    EventKind.ORDERBOOK: "orderbook",
    EventKind.TRADE: "trade",
    EventKind.TICKER: "ticker",
    EventKind.USER: "user",
    EventKind.CONTROL: "control",
    EventKind.ERROR: "error",
}


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def to_jsonable(payload: Any) -> Any:
    """Convert models (and lists of them) into plain JSON-ready values."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_none=True)
    if isinstance(payload, (list, tuple)):
        return [to_jsonable(item) for item in payload]
    if isinstance(payload, Exception):
        return repr(payload)
    return payload


def format_side(amount: float | None) -> Text:
    """Green BID for positive amounts, red ASK for negative ones."""
    if amount is None:
        return Text("--", style="muted")
    if amount > 0:
        return Text("BID", style="bid")
    return Text("ASK", style="ask")


def format_event(event: Event) -> Text:
    """One line per event: name, pair, side (for single entries), JSON payload."""
    text = Text()
    text.append(f"{event.name:<12}", style=_KIND_STYLES.get(event.kind, "muted"))
    text.append(f" {event.pair or '-':<8} ", style="header")

    amount = getattr(event.payload, "amount", None)
    if amount is not None:
        text.append_text(format_side(amount))
        text.append(" ")

    if isinstance(event.payload, list):
        text.append(f"[{len(event.payload)} entries] ", style="muted")

    text.append(orjson.dumps(to_jsonable(event.payload), default=str).decode())
    return text


def create_channel_table(title: str = "Channels") -> Table:
    """Build a Rich Table listing registered channels."""
    table = Table(title=title, show_lines=False, pad_edge=True)
    table.add_column("Chan", justify="right", width=6)
    table.add_column("Kind", style="header")
    table.add_column("Pair", style="bold")
    table.add_column("Prec", width=5)
    table.add_column("Len", justify="right", width=5)
    return table
