"""Server state management."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Any

from springprobe.extractors.base import ExtractionResult
from springprobe.logging_config import get_logger
from springprobe_mcp.server.config import get_workspace
from springprobe_mcp.server.utils import resolve_project_path

logger = get_logger("mcp_server")


class ServerState:
    """Per-server settings shared by every tool module.

    Holds no per-request data: every tool call resolves its own project
    path and runs its own extractor or build.
    """

    def __init__(self, workspace: str | None = None) -> None:
        self._workspace = workspace

    @property
    def workspace(self) -> str:
        # read lazily so SPRINGPROBE_WORKSPACE changes are honored
        return self._workspace or get_workspace()

    def resolve(self, project_path: str | None) -> str:
        return resolve_project_path(project_path, self.workspace)

    async def run_extractor(
        self,
        func: Callable[..., ExtractionResult],
        *args: Any,
    ) -> dict[str, Any]:
        """Run a blocking extractor in a worker thread and serialize it."""
        start = time.perf_counter()
        result = await asyncio.to_thread(func, *args)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "%s finished in %.0fms (found=%s)",
            func.__name__,
            elapsed_ms,
            result.found,
        )
        return result.to_dict()
