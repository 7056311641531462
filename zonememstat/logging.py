"""
zonememstat.logging
AUTHOR: carter-vin

Structured JSON event logging for ops ingestion

Contract:
- One JSON object per line to stderr (stdout carries record output)
- Stable event vocabulary (allowlist)
- UTC timestamps only
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any

# Event types
VALID_EVENT_TYPES = {
    "collection_start",
    "collection_complete",
    "collection_failed",
    "command_exit_nonzero",
    "line_parse_failed",
}


# Free-text fields and their length caps; a zonememstat line is ~100 chars
FIELD_LIMITS = {
    "message": 200,
    "line": 120,
}


def _clip(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


def emit_event(event_type: str, *, agent_version: str, **fields: Any) -> None:
    """
    Emit structured event line to stderr

    Rules:
    - event_type in VALID_EVENT_TYPES
    - event_type, agent_version, timestamp always present
    - sort_keys + compact separators for format
    """
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"invalid event_type: {event_type}")

    for key, limit in FIELD_LIMITS.items():
        if isinstance(fields.get(key), str):
            fields[key] = _clip(fields[key], limit)

    payload: dict[str, Any] = {
        "event_type": event_type,
        "utc_now": datetime.now(timezone.utc).isoformat(),
        "agent_version": agent_version,
        **fields,
    }

    print(
        json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        ),
        file=sys.stderr,
    )
