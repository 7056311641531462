"""
zonememstat.config
AUTHOR: carter-vin

Collector configuration

Precedence (lowest to highest):
1) defaults
2) env vars (ZONEMEMSTAT_*)
3) explicit overrides (CLI options, call arguments)
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from zonememstat.runner import ZONEMEMSTAT_ARGS, ZONEMEMSTAT_COMMAND

AGENT_VERSION = "0.1.0"

COMMAND_ENV = "ZONEMEMSTAT_COMMAND"
ON_MALFORMED_ENV = "ZONEMEMSTAT_ON_MALFORMED"
TIMEOUT_ENV = "ZONEMEMSTAT_TIMEOUT_S"


class MalformedLinePolicy(str, Enum):
    """
    What to do with a line that does not parse
    - skip: record it, emit line_parse_failed, keep going
    - abort: fail the whole collection, no partial records
    """

    SKIP = "skip"
    ABORT = "abort"


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw!r}") from None
    if not value > 0:
        raise ValueError(f"{TIMEOUT_ENV} must be > 0, got {raw!r}")
    return value


@dataclass(frozen=True)
class CollectorConfig:
    command: str = ZONEMEMSTAT_COMMAND
    policy: MalformedLinePolicy = MalformedLinePolicy.SKIP
    timeout_s: Optional[float] = None

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.command, *ZONEMEMSTAT_ARGS)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CollectorConfig":
        """
        Build config from ZONEMEMSTAT_* env vars

        Raises ValueError on unrecognized values.
        """
        env = os.environ if environ is None else environ
        config = cls()

        command = env.get(COMMAND_ENV)
        if command:
            config = dataclasses.replace(config, command=command)

        policy = env.get(ON_MALFORMED_ENV)
        if policy:
            try:
                config = dataclasses.replace(config, policy=MalformedLinePolicy(policy.lower()))
            except ValueError:
                valid = sorted(p.value for p in MalformedLinePolicy)
                raise ValueError(f"{ON_MALFORMED_ENV} must be one of {valid}, got {policy!r}") from None

        timeout = env.get(TIMEOUT_ENV)
        if timeout:
            config = dataclasses.replace(config, timeout_s=_parse_timeout(timeout))

        return config

    def with_overrides(
        self,
        *,
        command: Optional[str] = None,
        policy: Optional[MalformedLinePolicy] = None,
        timeout_s: Optional[float] = None,
    ) -> "CollectorConfig":
        """
        Apply non-None overrides on top of this config
        """
        changes: dict[str, object] = {}
        if command is not None:
            changes["command"] = command
        if policy is not None:
            changes["policy"] = policy
        if timeout_s is not None:
            changes["timeout_s"] = timeout_s
        return dataclasses.replace(self, **changes)
