"""JSON property naming convention used by a DTO package."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate, read_source
from springprobe.extractors._text import strip_comments
from springprobe.extractors.base import NotFound, extractor

logger = structlog.get_logger(__name__)

SNAKE_CASE = "snake_case"
CAMEL_CASE = "camelCase"
OTHER = "other"

SNAKE_CASE_MARKER = re.compile(
    r"@JsonNaming\s*\(\s*(?:[\w.]*\.)?"
    r"PropertyNamingStrateg(?:y|ies)\s*\.\s*SnakeCaseStrategy\b"
)
EXPLICIT_STRATEGY_MARKER = re.compile(r"@JsonNaming\b")


@dataclass(frozen=True)
class NamingSummary:
    dto_package: str
    strategies: dict[str, int] = field(default_factory=dict)
    found: bool = True

    @property
    def files_analyzed(self) -> int:
        return sum(self.strategies.values())

    @property
    def primary_strategy(self) -> str:
        # max() keeps the first of equal counts, i.e. first seen wins a tie
        if not self.strategies:
            return CAMEL_CASE
        return max(self.strategies, key=self.strategies.__getitem__)

    @property
    def recommendation(self) -> str:
        if self.primary_strategy == SNAKE_CASE:
            return 'Use snake_case in JSON: {"company_id": 100}'
        return 'Use camelCase in JSON: {"companyId": 100}'

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "dtoPackage": self.dto_package,
            "filesAnalyzed": self.files_analyzed,
            "strategies": dict(self.strategies),
            "primaryStrategy": self.primary_strategy,
            "recommendation": self.recommendation,
        }


def classify(text: str) -> str:
    if SNAKE_CASE_MARKER.search(text):
        return SNAKE_CASE
    if EXPLICIT_STRATEGY_MARKER.search(text):
        return OTHER
    return CAMEL_CASE


@extractor
def extract_naming_strategy(
    root: Path | str, dto_package: str
) -> NamingSummary | NotFound:
    """Tally naming markers over every file under a dotted package.

    Args:
        root: Project root
        dto_package: Dotted package name, e.g. ``com.example.api.dto``
    """
    corpus = locate(root, "*", package=dto_package)
    if not corpus:
        return NotFound(message=f"No DTO files found in package {dto_package}")

    tally: Counter[str] = Counter(
        classify(strip_comments(read_source(p))) for p in corpus.paths
    )
    logger.debug(
        "naming strategies tallied", package=dto_package, tally=dict(tally)
    )
    return NamingSummary(dto_package=dto_package, strategies=dict(tally))
