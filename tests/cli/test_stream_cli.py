"""
Tests for the replay and validate commands
"""
import json

import pytest
from typer.testing import CliRunner

from a2ui_stream.cli import app
from a2ui_stream.config import DEFAULT_DELIMITER


runner = CliRunner()


def _line(message: dict) -> str:
    return json.dumps(message) + "\n"


@pytest.fixture
def recorded_stream(tmp_path):
    body = (
        "Hi"
        + DEFAULT_DELIMITER
        + _line({"surfaceUpdate": {"surfaceId": "s1", "components": [
            {"id": "root", "component": {"Text": {"text": {"literalString": "x"}}}},
        ]}})
        + _line({"beginRendering": {"surfaceId": "s1", "root": "root"}})
    )
    path = tmp_path / "stream.txt"
    path.write_text(body)
    return path


def test_replay_json(recorded_stream):
    result = runner.invoke(app, ["replay", str(recorded_stream), "--json", "--chunk-size", "3"])

    assert result.exit_code == 0
    assert '"mode": "STRUCTURED"' in result.output
    assert '"Hi"' in result.output
    assert '"isLive": true' in result.output


def test_replay_table(recorded_stream):
    result = runner.invoke(app, ["replay", str(recorded_stream)])

    assert result.exit_code == 0
    assert "Surfaces" in result.output
    assert "s1" in result.output


def test_replay_without_surfaces(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_text("just text")

    result = runner.invoke(app, ["replay", str(path)])

    assert result.exit_code == 0
    assert "just text" in result.output
    assert "No surfaces" in result.output


def test_validate_ok(tmp_path):
    path = tmp_path / "body.jsonl"
    path.write_text(_line({"deleteSurface": {"surfaceId": "s1"}}))

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 0
    assert "Valid A2UI JSONL" in result.output


def test_validate_reports_errors(tmp_path):
    path = tmp_path / "body.jsonl"
    path.write_text(_line({"createSurface": {"surfaceId": "s1"}}) + "{oops\n")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "Line 1" in result.output
    assert "Line 2" in result.output
