"""
Contract tests for the ZoneMemStat record and its JSON shape.

Downstream exporters key on these column names.
"""

import dataclasses
import json

import pytest

from zonememstat.model import ZoneMemStat, stats_to_json


def _gz() -> ZoneMemStat:
    return ZoneMemStat(
        zonename="global", alias=None, rss=850, cap=16777215, nover=0, pout=0, swap=None
    )


def test_record_is_frozen() -> None:
    stat = _gz()

    with pytest.raises(dataclasses.FrozenInstanceError):
        stat.rss = 1  # type: ignore[misc]


def test_record_uses_slots() -> None:
    # Slots-based dataclasses don't have __dict__
    assert not hasattr(_gz(), "__dict__")


def test_to_dict_keys_match_columns() -> None:
    assert list(_gz().to_dict().keys()) == [
        "zonename",
        "alias",
        "rss",
        "cap",
        "nover",
        "pout",
        "swap",
    ]


def test_stats_to_json_preserves_order_and_nulls() -> None:
    """
    Absent alias/swap serialize as null; list order is collection order
    """
    ngz = ZoneMemStat(
        zonename="6dc5da73-e4e5-45b6-80b9-5d2073e9b1ee",
        alias="amon0",
        rss=174,
        cap=1024,
        nover=0,
        pout=0,
        swap=7.11193,
    )

    payload = json.loads(stats_to_json([_gz(), ngz]))

    assert [p["zonename"] for p in payload] == ["global", ngz.zonename]
    assert payload[0]["alias"] is None
    assert payload[0]["swap"] is None
    assert payload[1]["alias"] == "amon0"
    assert payload[1]["swap"] == 7.11193


def test_stats_to_json_empty() -> None:
    assert stats_to_json([]) == "[]"
