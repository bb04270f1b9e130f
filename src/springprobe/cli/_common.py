"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def resolve_project(directory: Path | None) -> Path:
    """Project root for a command (default: current directory)."""
    return directory.resolve() if directory else Path.cwd()


def emit(result: dict[str, Any]) -> None:
    """Print a result the way the MCP tools return it."""
    print(json.dumps(result, indent=2, ensure_ascii=False))
