"""MCP tool modules.

Each module exports a register_*_tools function that registers
tools with the MCP server using the provided state and decorator.
"""

from springprobe_mcp.tools.build import register_build_tools
from springprobe_mcp.tools.environment import register_environment_tools
from springprobe_mcp.tools.extraction import register_extraction_tools

__all__ = [
    "register_build_tools",
    "register_environment_tools",
    "register_extraction_tools",
]
