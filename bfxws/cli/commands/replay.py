"""bfxws replay <file> -- Decode a recording of raw frames offline.

The file holds one JSON frame per line, as received from the socket. Blank
lines and lines starting with '#' are skipped. Frames are fed through a fresh
dispatcher, so the recording must include the subscription acks.
"""

from __future__ import annotations

from pathlib import Path

import typer

from bfxws.cli.display import console, create_channel_table, format_event
from bfxws.ingestion.dispatcher import Dispatcher
from bfxws.ingestion.events import EventKind


def _print_channels(dispatcher: Dispatcher) -> None:
    table = create_channel_table()
    for sub in dispatcher.channels:
        table.add_row(
            str(sub.channel_id),
            sub.kind.value,
            sub.pair or "--",
            sub.precision.value if sub.precision else "--",
            sub.length or "--",
        )
    console.print(table)


def replay(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Recorded frames, one per line"),
    raw: bool = typer.Option(False, "--raw", help="Also print every raw frame"),
    channels: bool = typer.Option(False, "--channels", help="Print the channel table at the end"),
) -> None:
    """Replay recorded frames and print the decoded events."""
    dispatcher = Dispatcher()
    kinds = None if raw else [k for k in EventKind if k is not EventKind.MESSAGE]
    dispatcher.add_listener(lambda event: console.print(format_event(event), soft_wrap=True), kinds=kinds)

    dispatcher.on_open()
    frames = 0
    with path.open("rb") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith(b"#"):
                continue
            frames += 1
            dispatcher.handle_raw(line)

    if channels:
        _print_channels(dispatcher)
    dispatcher.on_close()

    counts = dispatcher.pop_counts()
    decoded = sum(
        n for name, n in counts.items() if name not in ("message", "open", "close")
    )
    console.print(f"[muted]{frames} frames, {decoded} events[/muted]")
