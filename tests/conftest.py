"""Shared test fixtures for the bfxws test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import LogCapture

from bfxws.ingestion.dispatcher import Dispatcher
from bfxws.ingestion.events import Event


@pytest.fixture
def book_ack() -> dict:
    """Subscription ack for an aggregated BTCUSD book."""
    return {
        "event": "subscribed",
        "channel": "book",
        "chanId": 5,
        "pair": "BTCUSD",
        "prec": "P0",
        "len": "25",
    }


@pytest.fixture
def raw_book_ack() -> dict:
    """Subscription ack for a raw-order ETHUSD book."""
    return {
        "event": "subscribed",
        "channel": "book",
        "chanId": 6,
        "pair": "ETHUSD",
        "prec": "R0",
        "len": "100",
    }


@pytest.fixture
def trades_ack() -> dict:
    return {"event": "subscribed", "channel": "trades", "chanId": 2, "pair": "BTCUSD"}


@pytest.fixture
def ticker_ack() -> dict:
    return {"event": "subscribed", "channel": "ticker", "chanId": 3, "pair": "BTCUSD"}


@pytest.fixture
def auth_ok() -> dict:
    return {"event": "auth", "status": "OK", "chanId": 0, "userId": 123}


@pytest.fixture
def ticker_fields() -> list:
    """bid, bidSize, ask, askSize, dailyChange, dailyChangePerc, lastPrice, volume, high, low"""
    return [36000.0, 1.5, 36001.0, 2.25, -120.0, -0.0033, 36000.5, 15234.2, 36500.0, 35500.0]


@pytest.fixture
def dispatcher() -> Dispatcher:
    """An open dispatcher with no channels registered."""
    d = Dispatcher()
    d.on_open()
    return d


@pytest.fixture
def subscribed(
    dispatcher: Dispatcher,
    book_ack: dict,
    raw_book_ack: dict,
    trades_ack: dict,
    ticker_ack: dict,
    auth_ok: dict,
) -> Dispatcher:
    """An open dispatcher with book, raw book, trades, ticker and auth channels."""
    for ack in (book_ack, raw_book_ack, trades_ack, ticker_ack, auth_ok):
        dispatcher.handle_frame(ack)
    return dispatcher


@pytest.fixture
def received(subscribed: Dispatcher) -> list[Event]:
    """Events delivered to a catch-all listener after the fixtures' acks."""
    events: list[Event] = []
    subscribed.add_listener(events.append)
    return events


@pytest.fixture
def log_output() -> Iterator[LogCapture]:
    """Route structlog output into a list of event dicts for the test."""
    capture = LogCapture()
    structlog.configure(
        processors=[capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )
    yield capture
    structlog.reset_defaults()
