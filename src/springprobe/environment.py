"""Probe the host for Maven, Java and a container runtime.

Probes shell out to ``<tool> --version`` style commands and never raise:
a missing binary, a non-zero exit or a hung command all read as
"not available".
"""

from __future__ import annotations

import asyncio
import contextlib
import re
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

PROBE_TIMEOUT_SECONDS = 15.0

MAVEN_VERSION = re.compile(r"Apache Maven (\d[\d.]*)")
JAVA_VERSION = re.compile(r"version \"?([^\"\s]+)\"?")
CONTAINER_VERSION = re.compile(r"version (\d[\d.]*)")

# tried in order; first one that answers wins
CONTAINER_RUNTIMES = ("docker", "podman")
NO_RUNTIME = "none"


@dataclass(frozen=True)
class ToolProbe:
    available: bool
    version: str = ""


async def run_probe(
    cmd: list[str], timeout: float = PROBE_TIMEOUT_SECONDS
) -> tuple[int | None, str]:
    """Run a probe command; return (exit code, combined output).

    The exit code is None when the command could not run or timed out.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as e:
        logger.debug("probe failed to start", cmd=cmd[0], error=str(e))
        return None, ""

    try:
        stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        logger.warning("probe timed out", cmd=" ".join(cmd), timeout=timeout)
        return None, ""
    finally:
        if proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()

    return proc.returncode, stdout.decode("utf-8", errors="replace")


async def probe_tool(cmd: list[str], pattern: re.Pattern[str]) -> ToolProbe:
    """A tool is available when its version command exits 0."""
    code, output = await run_probe(cmd)
    if code != 0:
        return ToolProbe(available=False)
    m = pattern.search(output)
    return ToolProbe(available=True, version=m.group(1) if m else "")


async def probe_maven(maven_cmd: list[str]) -> ToolProbe:
    return await probe_tool([*maven_cmd, "-version"], MAVEN_VERSION)


async def probe_java() -> ToolProbe:
    # java prints its version banner on stderr
    return await probe_tool(["java", "-version"], JAVA_VERSION)


async def _detect_runtime() -> str:
    for runtime in CONTAINER_RUNTIMES:
        code, _ = await run_probe([runtime, "--version"])
        if code == 0:
            return runtime
    return NO_RUNTIME


class RuntimeCache:
    """Process-wide memo for the container runtime, single-flight.

    Concurrent first callers on one event loop await the same in-flight
    probe. A found runtime is remembered for the life of the process;
    ``none`` is not, so a runtime installed later is picked up.
    """

    def __init__(self) -> None:
        self._runtime: str | None = None
        self._inflight: asyncio.Task[str] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def get(self) -> str:
        if self._runtime is not None:
            return self._runtime

        loop = asyncio.get_running_loop()
        if self._inflight is None or self._loop is not loop:
            self._inflight = loop.create_task(_detect_runtime())
            self._loop = loop
            self._inflight.add_done_callback(self._settle)

        return await asyncio.shield(self._inflight)

    def _settle(self, task: asyncio.Task[str]) -> None:
        if task is not self._inflight:
            return
        self._inflight = None
        if task.cancelled() or task.exception() is not None:
            return
        runtime = task.result()
        if runtime != NO_RUNTIME:
            self._runtime = runtime
            logger.debug("container runtime cached", runtime=runtime)

    def clear(self) -> None:
        self._runtime = None
        self._inflight = None
        self._loop = None


_runtime_cache = RuntimeCache()


async def detect_container_runtime() -> str:
    """``docker``, ``podman`` or ``none``."""
    return await _runtime_cache.get()


async def probe_container(runtime: str) -> ToolProbe:
    if runtime == NO_RUNTIME:
        return ToolProbe(available=False)
    return await probe_tool([runtime, "--version"], CONTAINER_VERSION)
