"""Detect controller responses wrapped by a ResponseBodyAdvice."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate_any, read_source
from springprobe.extractors._text import strip_comments
from springprobe.extractors.base import extractor

logger = structlog.get_logger(__name__)

WRAPPER_FILE_PATTERNS = ["*Advice*", "*Response*"]

DEFAULT_WRAPPER_FIELD = "data"

INTERCEPTION_CONTRACT = re.compile(r"\bResponseBodyAdvice\b")

# ordered: the first template that matches in any file names the field
WRAPPER_FIELD_TEMPLATES: list[re.Pattern[str]] = [
    # wrapper.put("data", body)
    re.compile(r"\.put\s*\(\s*\"(\w+)\"\s*,\s*body\s*\)"),
    # Map.of("data", body)
    re.compile(r"\bMap\s*\.\s*of\s*\(\s*\"(\w+)\"\s*,\s*body\b"),
    # @JsonProperty("data") on the wrapper's payload field
    re.compile(r"@JsonProperty\s*\(\s*\"(\w+)\"\s*\)\s*(?:private\s+)?T\s+\w+"),
    # private T data; / private Object data;
    re.compile(r"\bprivate\s+(?:final\s+)?(?:T|Object)\s+(\w+)\s*;"),
]


@dataclass(frozen=True)
class ResponseWrapper:
    has_wrapper: bool
    wrapper_class: str | None = None
    wrapper_field: str | None = None

    @property
    def found(self) -> bool:
        return self.has_wrapper

    @property
    def json_path_prefix(self) -> str:
        return f"$.{self.wrapper_field}" if self.has_wrapper else "$"

    @property
    def recommendation(self) -> str:
        if self.has_wrapper:
            return (
                f'Use jsonPath("{self.json_path_prefix}.id") in controller '
                "tests"
            )
        return 'Use jsonPath("$.id") directly in controller tests'

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": self.has_wrapper,
            "hasWrapper": self.has_wrapper,
            "wrapperClass": self.wrapper_class,
            "wrapperField": self.wrapper_field,
            "jsonPathPrefix": self.json_path_prefix,
            "recommendation": self.recommendation,
        }


def find_wrapper_field(texts: list[str]) -> str:
    for template in WRAPPER_FIELD_TEMPLATES:
        for text in texts:
            m = template.search(text)
            if m:
                return m.group(1)
    return DEFAULT_WRAPPER_FIELD


@extractor
def extract_response_wrapper(root: Path | str) -> ResponseWrapper:
    """Check whether controller responses are wrapped (``{data: ...}``).

    A wrapper exists when a located advice or response file implements
    ``ResponseBodyAdvice``. The wrapping field name is best-effort and
    falls back to ``data``.
    """
    corpus = locate_any(root, WRAPPER_FILE_PATTERNS)
    sources = {p.stem: strip_comments(read_source(p)) for p in corpus.paths}

    wrapper_class = next(
        (
            stem
            for stem, text in sources.items()
            if INTERCEPTION_CONTRACT.search(text)
        ),
        None,
    )
    if wrapper_class is None:
        logger.debug("no response wrapper", candidates=len(corpus))
        return ResponseWrapper(has_wrapper=False)

    # the advice itself, then the wrapper types it refers to by name
    advice = sources[wrapper_class]
    texts = [advice] + [
        text
        for stem, text in sources.items()
        if stem != wrapper_class
        and re.search(rf"\b{re.escape(stem)}\b", advice)
    ]
    field_name = find_wrapper_field(texts)
    logger.debug(
        "response wrapper found", wrapper=wrapper_class, field=field_name
    )
    return ResponseWrapper(
        has_wrapper=True,
        wrapper_class=wrapper_class,
        wrapper_field=field_name,
    )
