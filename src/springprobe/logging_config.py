"""structlog configuration for springprobe.

Environment variables:
    SPRINGPROBE_DEBUG: When truthy, log at DEBUG instead of INFO.
    SPRINGPROBE_LOG_FILE: Append log lines to this file instead of stderr.

stdout is reserved for the MCP stdio transport, so console output always
goes to stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog

ENV_DEBUG = "SPRINGPROBE_DEBUG"
ENV_LOG_FILE = "SPRINGPROBE_LOG_FILE"

_LOGGER_PREFIX = "springprobe"

# keep the file handle alive for the lifetime of the process
_log_file_handle: Any = None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes", "on")


def configure_logging(
    debug: bool | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure structlog for the CLI and the MCP server.

    Args:
        debug: Force DEBUG level (default: from SPRINGPROBE_DEBUG)
        log_file: Write logs to this file (default: SPRINGPROBE_LOG_FILE,
            otherwise stderr)
    """
    global _log_file_handle

    if debug is None:
        debug = _env_flag(ENV_DEBUG)
    if log_file is None:
        env_file = os.environ.get(ENV_LOG_FILE)
        if env_file:
            log_file = Path(env_file)

    level = logging.DEBUG if debug else logging.INFO

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if _log_file_handle is not None:
            _log_file_handle.close()
        _log_file_handle = log_file.open("a", encoding="utf-8")
        logger_factory: Any = structlog.WriteLoggerFactory(
            file=_log_file_handle
        )
        renderers: list[Any] = [
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "logger", "event"]
            ),
        ]
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)
        # ConsoleRenderer formats exc_info itself
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a logger bound under the springprobe namespace."""
    full_name = f"{_LOGGER_PREFIX}.{name}" if name else _LOGGER_PREFIX
    return structlog.get_logger(full_name).bind(logger=full_name)
