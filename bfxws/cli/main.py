"""bfxws CLI entry point.

Usage:
    python -m bfxws.cli.main [COMMAND] [OPTIONS]

Or via the installed console script:
    bfxws [COMMAND] [OPTIONS]
"""

from __future__ import annotations

import typer

from bfxws.cli.commands import replay, tail

app = typer.Typer(
    name="bfxws",
    help="bfxws -- Bitfinex websocket channel decoder",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=True,
)

# Register sub-commands from each module.
app.command(name="tail", help="Stream decoded events from a live connection")(tail.tail)
app.command(name="replay", help="Decode a recording of raw frames")(replay.replay)


if __name__ == "__main__":
    app()
