"""Server configuration constants and tool category management."""

from __future__ import annotations

import os

# Environment variable names
ENV_WORKSPACE = "SPRINGPROBE_WORKSPACE"
ENV_TOOLS = "SPRINGPROBE_TOOLS"

# Project root used when a request names none (the server normally runs in
# a container with the project mounted here)
DEFAULT_WORKSPACE = "/workspace"

SERVER_NAME = "springprobe"
HEALTH_RESOURCE_URI = "springprobe://health"

# ---------------------------------------------------------------------------
# Tool Categories - controls which tools are exposed via SPRINGPROBE_TOOLS
# ---------------------------------------------------------------------------
# Default: all categories
# Set SPRINGPROBE_TOOLS to comma-separated categories to narrow the surface
# e.g., SPRINGPROBE_TOOLS=web,persistence,build

TOOL_CATEGORIES: dict[str, set[str]] = {
    # Host toolchain probing
    "environment": {
        "check_environment",
    },
    # Token/claim structure
    "security": {
        "investigate_jwt_claims",
    },
    # Controllers, response shape, JSON naming
    "web": {
        "investigate_response_wrapper",
        "analyze_controller",
        "check_json_naming_strategy",
    },
    # Entities, repositories, services
    "persistence": {
        "investigate_entity_relationships",
        "analyze_repository",
        "investigate_service",
    },
    # Properties, profiles, framework versions
    "config": {
        "find_missing_properties",
        "find_beans_needing_exclusion",
        "check_spring_boot_version",
    },
    # Maven compile and test runs
    "build": {
        "validate_maven_compile",
        "run_test_checkpoint",
    },
}

DEFAULT_TOOL_CATEGORIES: set[str] = set(TOOL_CATEGORIES)


def get_workspace() -> str:
    """Default project root, from SPRINGPROBE_WORKSPACE."""
    return os.environ.get(ENV_WORKSPACE, "").strip() or DEFAULT_WORKSPACE


def get_enabled_categories() -> set[str]:
    """Get enabled tool categories from SPRINGPROBE_TOOLS env var.

    Returns:
        Set of enabled category names. Defaults to every category.
        SPRINGPROBE_TOOLS=all also enables everything.
    """
    env = os.environ.get(ENV_TOOLS, "").strip()
    if not env or env.lower() == "all":
        return DEFAULT_TOOL_CATEGORIES.copy()
    return {c.strip().lower() for c in env.split(",") if c.strip()}


def get_enabled_tools() -> set[str]:
    """Get set of enabled tool names based on enabled categories."""
    categories = get_enabled_categories()
    tools: set[str] = set()
    for cat in categories:
        if cat in TOOL_CATEGORIES:
            tools.update(TOOL_CATEGORIES[cat])
    return tools
