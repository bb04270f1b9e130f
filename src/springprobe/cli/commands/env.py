"""Env command - report Maven, Java and container runtime availability."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from springprobe.cli._common import emit


@dataclass
class Env:
    """Check the host toolchain (and a project's Maven wrapper)."""

    directory: Path | None = field(
        default=None,
        metadata={"help": "Project root to check for a Maven wrapper"},
    )

    def run(self) -> int:
        from springprobe_mcp.tools.environment import probe_environment

        project = str(self.directory.resolve()) if self.directory else None
        report = asyncio.run(probe_environment(project))
        emit(report.to_dict())
        return 0
