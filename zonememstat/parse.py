"""
zonememstat.parse
AUTHOR: carter-vin

Line parser for `zonememstat -H -a` output

Line format (whitespace separated, column padding ignored):
    <zonename> <alias|-> <rss> <cap> <nover> <pout> <swap|->

- pure functions, no process handling
- required numeric fields fail loudly (LineParseError)
- alias and swap degrade to None
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zonememstat.errors import LineParseError
from zonememstat.model import ZoneMemStat

FIELD_COUNT = 7
NO_ALIAS = "-"


def _parse_unsigned(token: str, field: str, line: str) -> int:
    # int() would also accept "+5", "-0" and "1_000"
    if not (token.isascii() and token.isdigit()):
        raise LineParseError(
            f"{field}: expected unsigned integer, got {token!r}",
            line=line,
            field=field,
        )
    return int(token)


def _parse_swap(token: str) -> Optional[float]:
    """
    Swap percent, or None when the token is not a number

    The global zone prints a placeholder here. nan and inf are kept as parsed.
    """
    # float() would also accept "1_0"
    if "_" in token:
        return None
    try:
        return float(token)
    except ValueError:
        return None


def parse_line(line: str) -> ZoneMemStat:
    """
    Parse a single zonememstat line into a ZoneMemStat

    Raises LineParseError on a wrong field count or a non-integer
    rss/cap/nover/pout.
    """
    fields = line.split()
    if len(fields) != FIELD_COUNT:
        raise LineParseError(
            f"expected {FIELD_COUNT} fields, got {len(fields)}",
            line=line,
        )

    zonename, alias, rss, cap, nover, pout, swap = fields

    return ZoneMemStat(
        zonename=zonename,
        alias=None if alias == NO_ALIAS else alias,
        rss=_parse_unsigned(rss, "rss", line),
        cap=_parse_unsigned(cap, "cap", line),
        nover=_parse_unsigned(nover, "nover", line),
        pout=_parse_unsigned(pout, "pout", line),
        swap=_parse_swap(swap),
    )


@dataclass(frozen=True)
class LineOutcome:
    """
    Normalized per-line parse result
    - ok: false=failure, reason in error_message
    - value: parsed record if ok=true
    """

    line: str
    ok: bool
    value: Optional[ZoneMemStat] = None
    error_field: Optional[str] = None
    error_message: Optional[str] = None


def try_parse_line(line: str) -> LineOutcome:
    """
    Parse a line & collect failure as data
    """
    try:
        return LineOutcome(line=line, ok=True, value=parse_line(line))
    except LineParseError as e:
        return LineOutcome(
            line=line,
            ok=False,
            error_field=e.field,
            error_message=str(e),
        )
