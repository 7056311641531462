"""
zonememstat.model
AUTHOR: carter-vin

Zone memory record + deterministic serialization primitives.

Design goals:
- One immutable record per zonememstat output line
- Field names match the zonememstat(8) output columns
- Explicit structure (no accidental serialization via __dict__)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Optional

GLOBAL_ZONE = "global"


@dataclass(slots=True, frozen=True)
class ZoneMemStat:
    """
    Memory accounting for a single zone (global zone included)
    - alias: None when the zone has no alias (printed as `-`)
    - cap: 0 means unlimited
    - swap: percent of swap cap used, None for the global zone
    """

    zonename: str
    alias: Optional[str]
    rss: int
    cap: int
    nover: int
    pout: int
    swap: Optional[float]

    @property
    def is_global(self) -> bool:
        return self.zonename == GLOBAL_ZONE

    @property
    def is_capped(self) -> bool:
        return self.cap != 0

    def to_dict(self) -> dict[str, Any]:
        # Explicit key mapping for stability
        return {
            "zonename": self.zonename,
            "alias": self.alias,
            "rss": self.rss,
            "cap": self.cap,
            "nover": self.nover,
            "pout": self.pout,
            "swap": self.swap,
        }


def stats_to_json(stats: Iterable[ZoneMemStat]) -> str:
    """
    Serialize records as a JSON list

    Rules:
    - list order is the order the records were collected in
    - sort_keys + compact separators keep output free of formatting drift
    """
    return json.dumps(
        [s.to_dict() for s in stats],
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
