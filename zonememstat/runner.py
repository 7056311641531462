"""
zonememstat.runner
AUTHOR: carter-vin

Process runner for `zonememstat -H -a`

- stdout is exposed as an async sequence of lines, read as the child emits them
- stderr is discarded
- launch failures raise CommandLaunchError (never "zero lines")
- the child is killed and reaped on every exit path
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Optional, Protocol, Sequence

from zonememstat.errors import CommandLaunchError

ZONEMEMSTAT_COMMAND = "zonememstat"
# -H: no header, -a: all zones
ZONEMEMSTAT_ARGS = ("-H", "-a")
DEFAULT_ARGV = (ZONEMEMSTAT_COMMAND, *ZONEMEMSTAT_ARGS)


async def _read_long_line(stream: asyncio.StreamReader, consumed: int) -> bytes:
    """
    Read a line longer than the stream buffer limit in chunks

    The line is returned whole so the parser decides what to do with it.
    """
    chunks: list[bytes] = []
    while True:
        chunks.append(await stream.read(consumed))
        try:
            chunks.append(await stream.readuntil(b"\n"))
        except asyncio.IncompleteReadError as e:
            chunks.append(e.partial)
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed
            continue
        return b"".join(chunks)


class LineSource(Protocol):
    """
    Anything that yields zonememstat-formatted lines

    Usage:
        async with source:
            async for line in source.lines():
                ...
        source.returncode  # set once the stream is exhausted or closed
    """

    argv: tuple[str, ...]
    returncode: Optional[int]

    async def __aenter__(self) -> "LineSource": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    def lines(self) -> AsyncIterator[str]: ...


class ProcessLineSource:
    """
    LineSource backed by a child process

    One instance per invocation; the child is owned by the `async with` block.
    """

    def __init__(self, argv: Sequence[str] = DEFAULT_ARGV) -> None:
        self.argv = tuple(argv)
        self.returncode: Optional[int] = None
        self._proc: Optional[asyncio.subprocess.Process] = None

    async def __aenter__(self) -> "ProcessLineSource":
        try:
            self._proc = await asyncio.create_subprocess_exec(
                *self.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise CommandLaunchError(self.argv, e) from e
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        proc = self._proc
        if proc is None:
            return
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                # exited between the check and the kill
                pass
        self.returncode = await proc.wait()

    async def lines(self) -> AsyncIterator[str]:
        """
        Yield stdout lines without the trailing newline
        """
        if self._proc is None or self._proc.stdout is None:
            raise RuntimeError("ProcessLineSource used outside of `async with`")

        stdout = self._proc.stdout
        while True:
            try:
                raw = await stdout.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                # EOF; last line may lack a newline
                raw = e.partial
                if not raw:
                    break
            except asyncio.LimitOverrunError as e:
                raw = await _read_long_line(stdout, e.consumed)
            yield raw.decode("utf-8", errors="replace").rstrip("\r\n")

        self.returncode = await self._proc.wait()
