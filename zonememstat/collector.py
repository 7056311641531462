"""
zonememstat.collector
AUTHOR: carter-vin

Drive runner lines through the parser and collect records in arrival order.

Failure semantics:
- launch failure -> failed result, no records
- malformed line -> skip (default) or abort (no partial records)
- non-zero exit -> failed result, records read so far are kept
- timeout / cancellation -> child process is killed and reaped
"""

from __future__ import annotations

import asyncio
import time
from contextlib import aclosing
from dataclasses import dataclass
from typing import Optional

from zonememstat.config import AGENT_VERSION, CollectorConfig, MalformedLinePolicy
from zonememstat.errors import CommandExitError, CommandLaunchError, LineParseError
from zonememstat.logging import emit_event
from zonememstat.model import ZoneMemStat
from zonememstat.parse import LineOutcome, try_parse_line
from zonememstat.runner import LineSource, ProcessLineSource


@dataclass(frozen=True)
class CollectionResult:
    """
    Outcome of one zonememstat invocation
    - ok: false=failure, error details in error_type/error_message
    - stats: records in the order the command printed them
    - skipped: lines dropped under the skip policy
    """

    ok: bool
    stats: tuple[ZoneMemStat, ...] = ()
    skipped: tuple[LineOutcome, ...] = ()
    returncode: Optional[int] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None


async def _collect_from(source: LineSource, policy: MalformedLinePolicy) -> CollectionResult:
    stats: list[ZoneMemStat] = []
    skipped: list[LineOutcome] = []

    async with source:
        async with aclosing(source.lines()) as lines:
            async for line in lines:
                if not line.strip():
                    continue

                outcome = try_parse_line(line)
                if outcome.ok:
                    stats.append(outcome.value)
                    continue

                emit_event(
                    "line_parse_failed",
                    agent_version=AGENT_VERSION,
                    policy=policy.value,
                    field=outcome.error_field,
                    message=outcome.error_message,
                    line=line,
                )
                if policy is MalformedLinePolicy.ABORT:
                    # Leaving the block kills the child
                    return CollectionResult(
                        ok=False,
                        skipped=(outcome,),
                        error_type=LineParseError.__name__,
                        error_message=outcome.error_message,
                    )
                skipped.append(outcome)

    returncode = source.returncode
    if returncode:
        err = CommandExitError(source.argv, returncode)
        emit_event(
            "command_exit_nonzero",
            agent_version=AGENT_VERSION,
            returncode=returncode,
            zones=len(stats),
        )
        return CollectionResult(
            ok=False,
            stats=tuple(stats),
            skipped=tuple(skipped),
            returncode=returncode,
            error_type=type(err).__name__,
            error_message=str(err),
        )

    return CollectionResult(
        ok=True,
        stats=tuple(stats),
        skipped=tuple(skipped),
        returncode=returncode,
    )


async def collect(
    source: Optional[LineSource] = None,
    *,
    policy: Optional[MalformedLinePolicy] = None,
    timeout_s: Optional[float] = None,
    config: Optional[CollectorConfig] = None,
) -> CollectionResult:
    """
    Run one collection and return a CollectionResult

    - source defaults to `zonememstat -H -a` (config.argv)
    - policy/timeout_s override the config values
    - cancellation of the awaiting task propagates after the child is reaped
    """
    config = (config or CollectorConfig()).with_overrides(policy=policy, timeout_s=timeout_s)
    if source is None:
        source = ProcessLineSource(config.argv)

    emit_event(
        "collection_start",
        agent_version=AGENT_VERSION,
        source=type(source).__name__,
        policy=config.policy.value,
        timeout_s=config.timeout_s,
    )
    start = time.monotonic()

    try:
        if config.timeout_s is None:
            result = await _collect_from(source, config.policy)
        else:
            result = await asyncio.wait_for(_collect_from(source, config.policy), config.timeout_s)
    except CommandLaunchError as e:
        result = CollectionResult(ok=False, error_type=type(e).__name__, error_message=str(e))
    except asyncio.TimeoutError:
        result = CollectionResult(
            ok=False,
            error_type="TimeoutError",
            error_message=f"collection exceeded {config.timeout_s}s",
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.ok:
        emit_event(
            "collection_complete",
            agent_version=AGENT_VERSION,
            zones=len(result.stats),
            skipped=len(result.skipped),
            elapsed_ms=elapsed_ms,
        )
    else:
        emit_event(
            "collection_failed",
            agent_version=AGENT_VERSION,
            zones=len(result.stats),
            elapsed_ms=elapsed_ms,
            error_type=result.error_type,
            message=result.error_message,
        )
    return result


async def collect_zone_memory_stats() -> list[ZoneMemStat]:
    """
    Records from `zonememstat -H -a`; the global zone is element 0.

    Returns an empty list when the collection failed (the collection_failed
    event carries the cause). Use collect() to tell the two apart.
    """
    try:
        config = CollectorConfig.from_env()
    except ValueError as e:
        emit_event(
            "collection_failed",
            agent_version=AGENT_VERSION,
            zones=0,
            error_type=type(e).__name__,
            message=str(e),
        )
        return []

    result = await collect(config=config)
    if not result.ok:
        return []
    return list(result.stats)
