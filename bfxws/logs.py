"""structlog setup shared by the websocket process and the CLI."""

from __future__ import annotations

import logging

import structlog

from bfxws.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog processors and the minimum level.

    ``log_format == "json"`` renders one JSON object per line, anything else
    uses the human-readable console renderer.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    if config.log_format.lower() == "json":
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
