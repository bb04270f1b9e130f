"""Exceptions raised inside the springprobe core.

Operations convert these to result data at their own boundary; callers of
the public extractor and build functions never see them.
"""

from __future__ import annotations

from pathlib import Path


class SpringProbeError(Exception):
    """Base class for springprobe errors."""


class ProjectNotFoundError(SpringProbeError):
    """The project root does not exist or is not a directory."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Project root {root} is not a directory")
        self.root = root


class ManifestParseError(SpringProbeError):
    """The build manifest is missing, unreadable or malformed."""
