"""Tests for the bfxws command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from bfxws.cli.main import app

runner = CliRunner()

RECORDING = """\
# recorded from wss://api.bitfinex.com/ws/
{"event":"info","version":1.1}
{"event":"subscribed","channel":"trades","chanId":2,"pair":"BTCUSD"}
{"event":"subscribed","channel":"book","chanId":5,"pair":"BTCUSD","prec":"R0","len":"25"}
[2,[[1,1610000000,100,0.5]]]
[2,"hb"]
[5,987654,36000.5,-0.25]

[2,"te","1",1610000001,101,0.3]
not json at all
[7,"te","2",1610000002,102,0.1]
"""


@pytest.fixture
def recording(tmp_path: Path) -> Path:
    path = tmp_path / "frames.jsonl"
    path.write_text(RECORDING)
    return path


class TestReplay:
    def test_prints_decoded_events(self, recording: Path) -> None:
        result = runner.invoke(app, ["replay", str(recording)])
        assert result.exit_code == 0, result.output
        assert "1 entries" in result.output
        assert '"order_id":987654' in result.output
        assert "ASK" in result.output
        assert '"seq":"1"' in result.output
        assert "invalid_json" in result.output
        assert "9 frames, 7 events" in result.output

    def test_skips_raw_frames_by_default(self, recording: Path) -> None:
        result = runner.invoke(app, ["replay", str(recording)])
        lines = result.output.splitlines()
        assert not any(line.startswith("message ") for line in lines)

    def test_raw_flag_prints_frames(self, recording: Path) -> None:
        result = runner.invoke(app, ["replay", str(recording), "--raw"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert sum(line.startswith("message ") for line in lines) == 8

    def test_channel_table(self, recording: Path) -> None:
        result = runner.invoke(app, ["replay", str(recording), "--channels"])
        assert result.exit_code == 0, result.output
        assert "Channels" in result.output
        assert "R0" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["replay", str(tmp_path / "nope.jsonl")])
        assert result.exit_code != 0


class TestTail:
    def test_requires_a_channel(self) -> None:
        result = runner.invoke(app, ["tail"])
        assert result.exit_code == 1
        assert "Nothing to tail" in result.output
