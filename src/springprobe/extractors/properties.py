"""Injected property keys missing from the test configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import (
    TEST_RESOURCES,
    ensure_project_root,
    locate,
    read_source,
)
from springprobe.extractors._text import strip_comments
from springprobe.extractors.base import extractor, unique

logger = structlog.get_logger(__name__)

TEST_PROPERTIES_FILE = "application-test.properties"

# @Value("${app.key}") / @Value("${app.key:default}") / @Value(value = ...)
VALUE_INJECTION = re.compile(
    r"@Value\s*\(\s*(?:value\s*=\s*)?[\"']\$\{\s*([^:}\s]+)"
)

# key ends at the first unescaped '=', ':' or whitespace
_PROPERTY_KEY = re.compile(r"((?:\\.|[^=:\s\\])+)")


@dataclass(frozen=True)
class PropertyGaps:
    total_properties: int
    missing_properties: list[str] = field(default_factory=list)
    test_properties_file_exists: bool = True
    found: bool = True

    @property
    def action(self) -> str:
        if not self.test_properties_file_exists:
            return (
                "Create src/test/resources/application-test.properties "
                "with these properties"
            )
        if self.missing_properties:
            return (
                f"Add these {len(self.missing_properties)} properties to "
                "application-test.properties"
            )
        return "All properties are defined in test config ✓"

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "totalProperties": self.total_properties,
            "missingProperties": list(self.missing_properties),
            "testPropertiesFileExists": self.test_properties_file_exists,
            "action": self.action,
        }


def injected_keys(texts: list[str]) -> list[str]:
    return unique(
        m.group(1) for text in texts for m in VALUE_INJECTION.finditer(text)
    )


def property_keys(text: str) -> set[str]:
    """Keys declared in a ``.properties`` document.

    Handles ``key=value``, ``key: value`` and ``key value`` lines and
    skips ``#`` / ``!`` comments and continuation lines.
    """
    keys: set[str] = set()
    continued = False
    for raw in text.splitlines():
        line = raw.strip()
        is_continuation = continued
        continued = line.endswith("\\") and not line.endswith("\\\\")
        if is_continuation or not line or line[0] in "#!":
            continue
        m = _PROPERTY_KEY.match(line)
        if m:
            keys.add(re.sub(r"\\(.)", r"\1", m.group(1)))
    return keys


@extractor
def extract_missing_properties(root: Path | str) -> PropertyGaps:
    """Cross-reference ``@Value`` keys with the test properties file."""
    project = ensure_project_root(root)
    corpus = locate(project)
    keys = injected_keys(
        [strip_comments(read_source(p)) for p in corpus.paths]
    )

    test_file = project.joinpath(*TEST_RESOURCES, TEST_PROPERTIES_FILE)
    if not test_file.is_file():
        logger.debug("test properties file missing", keys=len(keys))
        return PropertyGaps(
            total_properties=len(keys),
            missing_properties=keys,
            test_properties_file_exists=False,
        )

    declared = property_keys(read_source(test_file))
    missing = [k for k in keys if k not in declared]
    logger.debug(
        "property gaps computed",
        files=len(corpus),
        keys=len(keys),
        missing=len(missing),
    )
    return PropertyGaps(total_properties=len(keys), missing_properties=missing)
