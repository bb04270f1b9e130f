"""Shared result types and the failure boundary for fact extractors."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, ParamSpec, Protocol

import structlog

from springprobe.errors import ProjectNotFoundError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")


class ExtractionResult(Protocol):
    """Anything an extractor returns: a flat record that serializes to a
    JSON-compatible dict carrying a found/not-found discriminator."""

    found: bool

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class NotFound:
    """The target artifact is absent. Never raised, always returned."""

    message: str
    found: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"found": False, "message": self.message}


def unique(items: Iterable[str]) -> list[str]:
    """Deduplicate preserving first-seen order."""
    return list(dict.fromkeys(items))


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def extractor(
    func: Callable[P, ExtractionResult],
) -> Callable[P, ExtractionResult]:
    """Convert every failure inside an extractor into a NotFound result.

    A missing project root becomes ``{found: false}`` with the reason;
    anything unexpected is logged with its traceback and reported the same
    way so one bad file never takes down the caller.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ExtractionResult:
        try:
            return func(*args, **kwargs)
        except ProjectNotFoundError as e:
            logger.info("project not found", extractor=func.__name__)
            return NotFound(message=str(e))
        except Exception as e:
            logger.exception("extractor failed", extractor=func.__name__)
            return NotFound(message=f"Extraction failed: {e}")

    return wrapper
