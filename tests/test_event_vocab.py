"""
Contract tests for the structured event surface.

The logging surface must reject unknown event types to keep aggregation stable,
and must keep stdout free for record output.
"""

import json

import pytest

from zonememstat.logging import emit_event


def test_emit_event_rejects_invalid_event_type() -> None:
    """
    Unknown event types must raise ValueError.
    """
    with pytest.raises(ValueError, match="invalid event_type"):
        emit_event("not_a_real_event", agent_version="0.1.0")


def test_emit_event_writes_json_to_stderr(capsys) -> None:
    emit_event(
        "collection_complete",
        agent_version="0.1.0",
        zones=3,
        skipped=0,
        elapsed_ms=12,
    )

    captured = capsys.readouterr()
    assert captured.out == ""

    payload = json.loads(captured.err.strip())
    assert payload["event_type"] == "collection_complete"
    assert "utc_now" in payload
    assert payload["agent_version"] == "0.1.0"
    assert payload["zones"] == 3


def test_emit_event_clips_raw_lines(capsys) -> None:
    """
    Raw output lines get a tighter cap than messages
    """
    emit_event("line_parse_failed", agent_version="0.1.0", line="x" * 500, message="short")

    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["line"] == "x" * 120 + "...[truncated 380 chars]"
    assert payload["message"] == "short"


def test_emit_event_clips_long_messages(capsys) -> None:
    emit_event("collection_failed", agent_version="0.1.0", message="m" * 300, zones=0)

    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["message"] == "m" * 200 + "...[truncated 100 chars]"
    assert payload["zones"] == 0
