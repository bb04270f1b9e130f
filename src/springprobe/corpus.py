"""Locate source files under a Maven-style project tree.

A corpus is the ordered list of files one operation considers. Paths are
returned in filesystem traversal order, which is not guaranteed to be
stable across platforms or filesystems; callers must not rely on it
being sorted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import structlog

from springprobe.errors import ProjectNotFoundError

logger = structlog.get_logger(__name__)

Scope = Literal["main", "test"]

SOURCE_EXTENSION = "java"

# conventional Maven source roots, relative to the project root
SOURCE_ROOTS: dict[str, tuple[str, ...]] = {
    "main": ("src", "main", "java"),
    "test": ("src", "test", "java"),
}

TEST_RESOURCES = ("src", "test", "resources")


@dataclass(frozen=True)
class SourceCorpus:
    """Files matched for one operation, rooted under a project."""

    root: Path
    scope: Scope
    pattern: str
    paths: tuple[Path, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def first(self) -> Path | None:
        return self.paths[0] if self.paths else None

    def relative(self, path: Path) -> str:
        """Path relative to the project root, POSIX separators."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


def ensure_project_root(root: Path | str) -> Path:
    """Resolve ``root`` and check it is an existing directory.

    Raises:
        ProjectNotFoundError: if root is not a directory
    """
    path = Path(root).expanduser().resolve()
    if not path.is_dir():
        raise ProjectNotFoundError(path)
    return path


def source_root(
    root: Path, scope: Scope = "main", package: str | None = None
) -> Path:
    """Return the source subtree for a scope, optionally narrowed to a
    dotted package name (``com.example.dto``)."""
    base = root.joinpath(*SOURCE_ROOTS[scope])
    if package:
        base = base.joinpath(*[p for p in package.split(".") if p])
    return base


def locate(
    root: Path | str,
    pattern: str = "*",
    scope: Scope = "main",
    package: str | None = None,
) -> SourceCorpus:
    """Find ``**/<pattern>.java`` under the scope's source subtree.

    Args:
        root: Project root directory
        pattern: Case-sensitive file-name glob without extension; may
            contain wildcards (e.g. ``*JwtTokenUtil*``)
        scope: ``main`` for production sources, ``test`` for test sources
        package: Optional dotted package narrowing the search subtree

    Returns:
        A corpus; empty when the source subtree does not exist.

    Raises:
        ProjectNotFoundError: if root is not a directory
    """
    project = ensure_project_root(root)
    base = source_root(project, scope, package)
    if not base.is_dir():
        logger.debug(
            "source subtree missing", root=str(project), subtree=str(base)
        )
        return SourceCorpus(root=project, scope=scope, pattern=pattern)

    paths = tuple(
        p
        for p in base.glob(
            f"**/{pattern}.{SOURCE_EXTENSION}", case_sensitive=True
        )
        if p.is_file()
    )
    logger.debug(
        "located sources",
        root=str(project),
        pattern=pattern,
        scope=scope,
        count=len(paths),
    )
    return SourceCorpus(root=project, scope=scope, pattern=pattern, paths=paths)


def locate_any(
    root: Path | str,
    patterns: list[str],
    scope: Scope = "main",
) -> SourceCorpus:
    """Union of several name patterns, first-seen order, no duplicates."""
    project = ensure_project_root(root)
    seen: dict[Path, None] = {}
    for pattern in patterns:
        for path in locate(project, pattern, scope).paths:
            seen.setdefault(path, None)
    return SourceCorpus(
        root=project,
        scope=scope,
        pattern="|".join(patterns),
        paths=tuple(seen),
    )


def read_source(path: Path) -> str:
    """Read a source file's full text; undecodable bytes are dropped."""
    return path.read_text(encoding="utf-8", errors="ignore")
