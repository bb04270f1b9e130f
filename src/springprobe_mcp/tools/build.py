"""Maven compile and test tools for springprobe MCP."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from springprobe.build import run_tests, validate_compile
from springprobe.logging_config import get_logger

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from springprobe_mcp.server.state import ServerState

logger = get_logger("mcp_server")


def register_build_tools(
    mcp: FastMCP,
    state: ServerState,
    tool_if_enabled: Callable,
) -> None:
    """Register Maven build tools.

    Args:
        mcp: FastMCP server instance
        state: Server state with workspace settings
        tool_if_enabled: Decorator for conditional tool registration
    """

    @tool_if_enabled
    async def validate_maven_compile(projectPath: str) -> dict[str, Any]:
        """Run `mvn clean compile test-compile` and summarize the result.

        Uses the project's Maven wrapper when present. Times out after
        SPRINGPROBE_COMPILE_TIMEOUT seconds (default 180).

        Args:
            projectPath: Project root

        Returns:
            success, message, up to 10 errors and a recommendation
        """
        root = state.resolve(projectPath)
        logger.info("compiling %s", root)
        outcome = await validate_compile(root)
        return outcome.to_dict()

    @tool_if_enabled
    async def run_test_checkpoint(
        projectPath: str,
        testClass: str | None = None,
        testMethod: str | None = None,
    ) -> dict[str, Any]:
        """Run tests and report counts and the first failures.

        Times out after SPRINGPROBE_TEST_TIMEOUT seconds (default 120).

        Args:
            projectPath: Project root
            testClass: Test class to run (default: all tests)
            testMethod: Single method within testClass

        Returns:
            success, testsRun, failures, errors, skipped and up to 5
            failure excerpts; or success=false with a message and the
            tail of the raw output when it could not be parsed
        """
        root = state.resolve(projectPath)
        logger.info("running tests in %s (class=%s)", root, testClass)
        outcome = await run_tests(root, testClass, testMethod)
        return outcome.to_dict()
