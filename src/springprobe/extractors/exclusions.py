"""Beans that talk to external providers and should stay out of tests."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate, read_source
from springprobe.extractors.base import extractor

logger = structlog.get_logger(__name__)

# cloud/storage/messaging provider terms, matched case-insensitively
EXCLUSION_KEYWORDS = ["aws", "tenant", "secret", "s3", "dynamo", "sqs", "sns"]

BEAN_MARKER = re.compile(r"@(?:Configuration|Service|Component)\b")
PROFILE_MARKER = re.compile(r"@Profile\b")

EXCLUSION_ACTION = (
    'Add: @Profile("!test") above @Configuration/@Service/@Component'
)


@dataclass(frozen=True)
class ExclusionCandidate:
    file: str
    path: str
    reason: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "path": self.path, "reason": self.reason}


@dataclass(frozen=True)
class ExclusionReport:
    beans: list[ExclusionCandidate] = field(default_factory=list)
    found: bool = True

    @property
    def recommendation(self) -> str:
        if self.beans:
            return f'Add @Profile("!test") to these {len(self.beans)} classes'
        return "No beans found that need exclusion"

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "count": len(self.beans),
            "beansToExclude": [b.to_dict() for b in self.beans],
            "recommendation": self.recommendation,
            "action": EXCLUSION_ACTION,
        }


def matched_keywords(file_name: str, text: str) -> list[str]:
    name, body = file_name.lower(), text.lower()
    return [k for k in EXCLUSION_KEYWORDS if k in name or k in body]


def needs_exclusion(file_name: str, text: str) -> list[str]:
    """Keywords that flag an unprofiled bean; empty if it is fine."""
    if not BEAN_MARKER.search(text) or PROFILE_MARKER.search(text):
        return []
    return matched_keywords(file_name, text)


@extractor
def extract_exclusion_candidates(root: Path | str) -> ExclusionReport:
    corpus = locate(root)
    beans = []
    for path in corpus.paths:
        reason = needs_exclusion(path.stem, read_source(path))
        if reason:
            beans.append(
                ExclusionCandidate(
                    file=path.stem,
                    path=corpus.relative(path),
                    reason=reason,
                )
            )
    logger.debug(
        "exclusion candidates found", scanned=len(corpus), flagged=len(beans)
    )
    return ExclusionReport(beans=beans)
