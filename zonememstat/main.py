"""
zonememstat.main
------------
AUTHOR: carter-vin

CLI entrypoint

Key contract:
- `zonememstat-agent --help` shows a Commands section.
- `zonememstat-agent collect` prints one JSON list of zone records to stdout.
- events go to stderr; exit code 1 when the collection failed
"""

from __future__ import annotations

import asyncio
import platform
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import typer

from zonememstat.collector import collect
from zonememstat.config import AGENT_VERSION, CollectorConfig, MalformedLinePolicy
from zonememstat.model import stats_to_json

# Explicit multi-command CLI
app = typer.Typer(
    add_completion=False,
    help="zonememstat-agent: per-zone memory accounting collector",
)


# -----------------------------
# DATA CLASSES
# -----------------------------
@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment
    - help correlate issues across hosts and times
    """

    python_version: str
    os: str
    machine: str
    utc_now: str


def collect_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        os=f"{platform.system()} {platform.release()}",
        machine=platform.machine(),
        utc_now=datetime.now(timezone.utc).isoformat(),
    )


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Root command behavior.

    If no subcommand is provided, print a short hint and exit 0.
    """
    if ctx.invoked_subcommand is None:
        typer.echo("No command provided. Try: zonememstat-agent --help")


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print agent version & runtime env
    """
    env = collect_environment_info()

    typer.echo(f"zonememstat-agent v{AGENT_VERSION}")
    typer.echo(f"python={env.python_version}")
    typer.echo(f"os={env.os}")
    typer.echo(f"machine={env.machine}")
    typer.echo(f"utc_now={env.utc_now}")


@app.command("collect")
def collect_cmd(
    on_malformed: Optional[MalformedLinePolicy] = typer.Option(
        None,
        "--on-malformed",
        case_sensitive=False,
        help="skip: drop unparseable lines; abort: fail the whole collection.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=0.001,
        help="Give up (and kill zonememstat) after this many seconds.",
    ),
    command: Optional[str] = typer.Option(
        None,
        "--command",
        help="Path to the zonememstat binary.",
    ),
) -> None:
    """
    Run zonememstat once and print the records as JSON

    Failure semantics:
    - records collected before a failure are still printed
    - exit code 1 if the collection failed (details in the stderr events)
    """
    try:
        config = CollectorConfig.from_env().with_overrides(
            command=command,
            policy=on_malformed,
            timeout_s=timeout,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    result = asyncio.run(collect(config=config))

    typer.echo(stats_to_json(result.stats))

    if not result.ok:
        raise typer.Exit(code=1)


# run command if invoked directly
if __name__ == "__main__":
    app()
