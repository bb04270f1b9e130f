"""MCP command - serve every tool over stdio or HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class Mcp:
    """Run the springprobe MCP server."""

    workspace: str | None = field(
        default=None,
        metadata={
            "help": "Default project root (default: SPRINGPROBE_WORKSPACE "
            "or /workspace)"
        },
    )
    transport: Literal["stdio", "sse", "streamable-http"] = field(
        default="stdio",
        metadata={"help": "MCP transport"},
    )

    def run(self) -> int:
        from springprobe_mcp.mcp_server import run_server

        run_server(workspace=self.workspace, transport=self.transport)
        return 0
