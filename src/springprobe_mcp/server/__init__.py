"""Server infrastructure: configuration, state, models and helpers."""

from springprobe_mcp.server.config import (
    DEFAULT_WORKSPACE,
    ENV_TOOLS,
    ENV_WORKSPACE,
    HEALTH_RESOURCE_URI,
    SERVER_NAME,
    TOOL_CATEGORIES,
    get_enabled_categories,
    get_enabled_tools,
    get_workspace,
)
from springprobe_mcp.server.models import (
    ContainerInfo,
    EnvironmentReport,
    ToolAvailability,
)
from springprobe_mcp.server.state import ServerState
from springprobe_mcp.server.utils import require, resolve_project_path

__all__ = [
    "DEFAULT_WORKSPACE",
    "ENV_TOOLS",
    "ENV_WORKSPACE",
    "HEALTH_RESOURCE_URI",
    "SERVER_NAME",
    "TOOL_CATEGORIES",
    "ContainerInfo",
    "EnvironmentReport",
    "ServerState",
    "ToolAvailability",
    "get_enabled_categories",
    "get_enabled_tools",
    "get_workspace",
    "require",
    "resolve_project_path",
]
