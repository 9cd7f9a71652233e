"""Launchability probe: can a server's command be started at all?

This is not an MCP handshake. The command is spawned with ``--help`` and
killed as soon as the OS confirms the process started.
"""

from __future__ import annotations

import asyncio
import logging
import os
from asyncio import subprocess
from collections.abc import Iterable

from cxmcp.core.config import DEFAULT_PROBE_TIMEOUT

from .models import Entry, LaunchDefinition, ProbeResult

log = logging.getLogger(__name__)

HELP_FLAG = "--help"


def probe(
    name: str, definition: LaunchDefinition, timeout: float = DEFAULT_PROBE_TIMEOUT
) -> ProbeResult:
    return _run_async(_probe(name, definition, timeout))


def probe_all(
    entries: Iterable[Entry], timeout: float = DEFAULT_PROBE_TIMEOUT
) -> list[ProbeResult]:
    """Probe every entry concurrently; results come back in input order."""
    entries = list(entries)
    if not entries:
        return []
    return _run_async(_probe_many(entries, timeout))


async def _probe_many(entries: list[Entry], timeout: float) -> list[ProbeResult]:
    return list(await asyncio.gather(*(_probe(e.name, e.definition, timeout) for e in entries)))


async def _probe(name: str, definition: LaunchDefinition, timeout: float) -> ProbeResult:
    env = {**os.environ, **definition.env} if definition.env else None
    spawn = asyncio.ensure_future(
        asyncio.create_subprocess_exec(
            definition.command,
            *definition.args,
            HELP_FLAG,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            env=env,
        )
    )

    # first of {started, failed to start, timer} wins
    try:
        proc = await asyncio.wait_for(asyncio.shield(spawn), timeout)
    except asyncio.TimeoutError:
        await _discard_spawn(spawn)
        log.debug("probe %s: timeout after %.1fs", name, timeout)
        return ProbeResult(name, False, "timeout")
    except (OSError, ValueError) as e:
        log.debug("probe %s: cannot start %r: %s", name, definition.command, e)
        return ProbeResult(name, False, "not found")

    if proc.returncode is not None:
        return _exit_result(name, proc.returncode)

    await _terminate(proc)
    log.debug("probe %s: started", name)
    return ProbeResult(name, True)


def _exit_result(name: str, code: int | None) -> ProbeResult:
    # no code means a signal ended it, which still proves it launched
    if code is None or code == 0:
        return ProbeResult(name, True)
    return ProbeResult(name, False, f"exit code {code}")


async def _terminate(proc: subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    await proc.wait()


async def _discard_spawn(spawn: asyncio.Future) -> None:
    # a process that still came up after the timer fired is killed and reaped
    spawn.cancel()
    await asyncio.wait([spawn])
    if spawn.cancelled() or spawn.exception() is not None:
        return
    await _terminate(spawn.result())


def _run_async(coro):
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    import concurrent.futures

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()
