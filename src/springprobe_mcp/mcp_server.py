from __future__ import annotations

from typing import Literal

from mcp.server.fastmcp import FastMCP

from springprobe.logging_config import configure_logging, get_logger
from springprobe_mcp.server import (
    HEALTH_RESOURCE_URI,
    SERVER_NAME,
    ServerState,
    get_enabled_categories,
    get_enabled_tools,
)
from springprobe_mcp.tools import (
    register_build_tools,
    register_environment_tools,
    register_extraction_tools,
)

logger = get_logger("mcp_server")

INSTRUCTIONS = """\
springprobe inspects a Spring Boot / Maven project and returns compact
facts for writing integration tests, without returning whole files.

<workflow>
1. check_environment, then check_spring_boot_version
2. investigate_jwt_claims and investigate_response_wrapper once per project
3. per feature: analyze_controller, investigate_service,
   analyze_repository, investigate_entity_relationships
4. find_missing_properties and find_beans_needing_exclusion before the
   first test run
5. validate_maven_compile after writing tests, then run_test_checkpoint
   per test class
</workflow>

Tools accept projectPath; an empty path or a Windows drive path resolves
to the mounted workspace.
"""


def create_server(workspace: str | None = None) -> FastMCP:
    """Create and configure the springprobe MCP server.

    Args:
        workspace: Default project root
            (default: SPRINGPROBE_WORKSPACE, or /workspace)

    Returns:
        Configured FastMCP server instance
    """
    state = ServerState(workspace=workspace)

    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.resource(HEALTH_RESOURCE_URI, mime_type="text/plain")
    def health() -> str:
        """Simple liveness resource to verify the server is reachable."""
        return "ok"

    _enabled_categories = get_enabled_categories()
    _enabled_tools = get_enabled_tools()
    logger.info(
        "tool categories enabled: %s (%d tools)",
        ", ".join(sorted(_enabled_categories)),
        len(_enabled_tools),
    )

    def tool_if_enabled(func):
        """Decorator that only registers tool if its category is enabled.

        Uses the function name to look up whether it should be registered.
        If the tool is not in any enabled category, returns the function
        as-is without registering it as an MCP tool.
        """
        if func.__name__ in _enabled_tools:
            return mcp.tool()(func)
        return func

    register_environment_tools(mcp, state, tool_if_enabled)
    register_extraction_tools(mcp, state, tool_if_enabled)
    register_build_tools(mcp, state, tool_if_enabled)

    return mcp


def run_server(
    workspace: str | None = None,
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio",
) -> None:
    """Run the springprobe MCP server.

    Args:
        workspace: Default project root
        transport: Transport type ("stdio" or "streamable-http")
    """
    configure_logging()
    mcp = create_server(workspace=workspace)
    logger.info("springprobe MCP server running on %s", transport)
    mcp.run(transport=transport)


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
