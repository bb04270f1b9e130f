"""Host environment check for springprobe MCP."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from springprobe.build.invoker import maven_command, wrapper_script_name
from springprobe.environment import (
    NO_RUNTIME,
    detect_container_runtime,
    probe_container,
    probe_java,
    probe_maven,
)
from springprobe.logging_config import get_logger
from springprobe_mcp.server.models import (
    ContainerInfo,
    EnvironmentReport,
    ToolAvailability,
)

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from springprobe_mcp.server.state import ServerState

logger = get_logger("mcp_server")

INSTALL_MAVEN = "Install Maven: https://maven.apache.org/install.html"
INSTALL_JAVA = "Install Java JDK 11+: https://adoptium.net/"
INSTALL_CONTAINER_RUNTIME = (
    "Optional: Install Docker (https://docs.docker.com/get-docker/) or "
    "Podman (https://podman.io/getting-started/installation)"
)
USE_WRAPPER = "Maven wrapper found - use ./mvnw instead of mvn"
WINDOWS_PATHS = (
    "Windows detected - ensure paths use double backslashes in config"
)


async def probe_environment(
    project_path: str | None = None,
) -> EnvironmentReport:
    """Probe Maven, Java and a container runtime concurrently.

    Args:
        project_path: When given, also report whether it ships a Maven
            wrapper script
    """
    maven, java, runtime = await asyncio.gather(
        probe_maven(maven_command()),
        probe_java(),
        detect_container_runtime(),
    )
    container = await probe_container(runtime)

    recommendations: list[str] = []
    if not maven.available:
        recommendations.append(INSTALL_MAVEN)
    if not java.available:
        recommendations.append(INSTALL_JAVA)
    if runtime == NO_RUNTIME:
        recommendations.append(INSTALL_CONTAINER_RUNTIME)

    has_wrapper: bool | None = None
    if project_path:
        has_wrapper = (Path(project_path) / wrapper_script_name()).is_file()
        if has_wrapper:
            recommendations.append(USE_WRAPPER)

    if sys.platform == "win32":
        recommendations.append(WINDOWS_PATHS)

    report = EnvironmentReport(
        platform=sys.platform,
        maven=ToolAvailability(
            available=maven.available, version=maven.version
        ),
        java=ToolAvailability(available=java.available, version=java.version),
        container=ContainerInfo(runtime=runtime, version=container.version),
        maven_wrapper=has_wrapper,
        recommendations=recommendations,
    )
    logger.info(
        "environment checked: maven=%s java=%s container=%s",
        maven.available,
        java.available,
        runtime,
    )
    return report


def register_environment_tools(
    mcp: FastMCP,
    state: ServerState,
    tool_if_enabled: Callable,
) -> None:
    """Register the environment check tool.

    Args:
        mcp: FastMCP server instance
        state: Server state with workspace settings
        tool_if_enabled: Decorator for conditional tool registration
    """

    @tool_if_enabled
    async def check_environment(
        projectPath: str | None = None,
    ) -> dict[str, Any]:
        """Check Maven, Java and container runtime availability.

        Run this first: compile and test tools need Maven and a JDK on
        the host (or in the server's container).

        Args:
            projectPath: Project root (default: the mounted workspace);
                used to detect a Maven wrapper

        Returns:
            platform, maven, java, container, mavenWrapper and
            recommendations
        """
        report = await probe_environment(state.resolve(projectPath))
        return report.to_dict()
