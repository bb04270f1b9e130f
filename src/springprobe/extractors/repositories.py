"""Query methods declared by a Spring Data repository."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate, read_source
from springprobe.extractors._text import mask, preamble, strip_comments
from springprobe.extractors.base import NotFound, extractor

logger = structlog.get_logger(__name__)

QUERY_VERBS = ("find", "count", "exists", "delete")

METHOD_DECLARATION = re.compile(
    r"(?<![\w.$])(?!return\b|new\b|throw\b)"
    r"(?P<returns>[\w.$]+(?:\s*<[^;{}()]*>)?(?:\s*\[\s*\])*)\s+"
    rf"(?P<name>(?:{'|'.join(QUERY_VERBS)})\w*)\s*\("
)

CUSTOM_QUERY = re.compile(r"@Query\b")
NATIVE_QUERY = re.compile(r"\bnativeQuery\s*=\s*true\b")
SOFT_DELETE_FILTER = re.compile(
    r"@(?:Where|SQLRestriction)\s*\([^)]*\bdeleted\b"
)


@dataclass(frozen=True)
class QueryMethod:
    return_type: str
    method_name: str
    is_custom_query: bool
    native_query: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "returnType": self.return_type,
            "methodName": self.method_name,
            "isCustomQuery": self.is_custom_query,
            "nativeQuery": self.native_query,
        }


@dataclass(frozen=True)
class RepositorySummary:
    repository: str
    query_methods: list[QueryMethod] = field(default_factory=list)
    has_soft_delete: bool = False
    found: bool = True

    def to_dict(self) -> dict[str, Any]:
        custom = any(m.is_custom_query for m in self.query_methods)
        return {
            "found": True,
            "repository": self.repository,
            "queryMethodCount": len(self.query_methods),
            "queryMethods": [m.to_dict() for m in self.query_methods],
            "hasSoftDelete": self.has_soft_delete,
            "testRecommendation": {
                "softDeleteWarning": (
                    "⚠️ Always set .deleted(false) in test data"
                    if self.has_soft_delete
                    else None
                ),
                "customQueryTests": (
                    "Write tests for custom @Query methods"
                    if custom
                    else "Standard Spring Data methods can use template"
                ),
            },
        }


def scan_query_methods(text: str) -> list[QueryMethod]:
    """Find query-verb method declarations in comment-free source text.

    Declarations are matched on a copy with string literals blanked, so
    JPQL inside ``@Query`` never reads as a method.
    """
    masked = mask(text)
    methods = []
    for m in METHOD_DECLARATION.finditer(masked):
        lead = preamble(masked, m.start())
        methods.append(
            QueryMethod(
                return_type=re.sub(r"\s+", " ", m.group("returns")),
                method_name=m.group("name"),
                is_custom_query=CUSTOM_QUERY.search(lead) is not None,
                native_query=NATIVE_QUERY.search(lead) is not None,
            )
        )
    return methods


@extractor
def extract_repository_queries(
    root: Path | str, repository_name: str
) -> RepositorySummary | NotFound:
    corpus = locate(root, repository_name)
    if not corpus.first:
        return NotFound(message=f"Repository {repository_name} not found")

    text = strip_comments(read_source(corpus.first))
    methods = scan_query_methods(text)
    soft_delete = SOFT_DELETE_FILTER.search(text) is not None
    logger.debug(
        "repository analyzed",
        repository=repository_name,
        methods=len(methods),
        soft_delete=soft_delete,
    )
    return RepositorySummary(
        repository=repository_name,
        query_methods=methods,
        has_soft_delete=soft_delete,
    )
