"""
zonememstat.errors
AUTHOR: carter-vin

Error types raised by the runner and the parser
"""

from __future__ import annotations

from typing import Optional, Sequence


class ZoneMemStatError(Exception):
    """Base for all zonememstat collection errors."""


class CommandLaunchError(ZoneMemStatError):
    """
    The external command could not be started

    Distinct from a command that ran and reported zero zones.
    """

    def __init__(self, argv: Sequence[str], cause: BaseException) -> None:
        self.argv = tuple(argv)
        self.cause = cause
        super().__init__(f"failed to launch {' '.join(self.argv)!r}: {cause}")


class LineParseError(ZoneMemStatError, ValueError):
    """
    A line could not be turned into a ZoneMemStat
    - field: name of the offending field, None for a field-count mismatch
    """

    def __init__(self, message: str, *, line: str, field: Optional[str] = None) -> None:
        self.line = line
        self.field = field
        super().__init__(message)


class CommandExitError(ZoneMemStatError):
    """The external command ran but exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int) -> None:
        self.argv = tuple(argv)
        self.returncode = returncode
        super().__init__(f"{' '.join(self.argv)!r} exited with status {returncode}")
