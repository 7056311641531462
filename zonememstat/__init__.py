"""zonememstat package exports."""

from zonememstat.collector import CollectionResult, collect, collect_zone_memory_stats
from zonememstat.config import CollectorConfig, MalformedLinePolicy
from zonememstat.errors import (
    CommandExitError,
    CommandLaunchError,
    LineParseError,
    ZoneMemStatError,
)
from zonememstat.model import ZoneMemStat, stats_to_json
from zonememstat.parse import LineOutcome, parse_line, try_parse_line
from zonememstat.runner import LineSource, ProcessLineSource

__all__ = [
    "CollectionResult",
    "CollectorConfig",
    "CommandExitError",
    "CommandLaunchError",
    "LineOutcome",
    "LineParseError",
    "LineSource",
    "MalformedLinePolicy",
    "ProcessLineSource",
    "ZoneMemStat",
    "ZoneMemStatError",
    "collect",
    "collect_zone_memory_stats",
    "parse_line",
    "stats_to_json",
    "try_parse_line",
]
