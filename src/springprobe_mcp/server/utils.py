"""Server utility functions."""

from __future__ import annotations

import re

from springprobe.logging_config import get_logger
from springprobe_mcp.server.config import get_workspace

logger = get_logger("mcp_server")

_WINDOWS_DRIVE_PATH = re.compile(r"^[A-Za-z]:\\")


def resolve_project_path(
    project_path: str | None, workspace: str | None = None
) -> str:
    """Map a requested project path onto one this server can read.

    An empty path, or a Windows drive path sent by a client on the host,
    resolves to the workspace the project is mounted at.

    Args:
        project_path: Path as sent by the client
        workspace: Fallback root (default: SPRINGPROBE_WORKSPACE)
    """
    workspace = workspace or get_workspace()
    if not project_path or not project_path.strip():
        return workspace
    if _WINDOWS_DRIVE_PATH.match(project_path):
        logger.debug(
            "host path %s mapped to workspace %s", project_path, workspace
        )
        return workspace
    return project_path


def require(value: str | None, name: str) -> str:
    """Reject a missing required tool argument."""
    if not value or not value.strip():
        raise ValueError(f"{name} is required")
    return value.strip()
