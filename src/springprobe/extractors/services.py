"""Dependencies, public API and failure modes of a service class."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate, read_source
from springprobe.extractors._text import mask, strip_comments
from springprobe.extractors.base import NotFound, extractor, unique

logger = structlog.get_logger(__name__)

_RETURN_TYPE = r"[\w.$]+(?:\s*<[^;{}()]*>)?(?:\s*\[\s*\])*"

REPOSITORY_FIELD_TEMPLATES: list[re.Pattern[str]] = [
    # @Autowired private UserRepository userRepository;
    re.compile(
        r"@Autowired\s+(?:(?:private|protected|public|final)\s+)*"
        r"(\w+Repository)\s+\w+"
    ),
    # private final UserRepository userRepository;  (constructor injection)
    re.compile(
        r"\b(?:private|protected)\s+final\s+(\w+Repository)\s+\w+\s*;"
    ),
]

PUBLIC_METHOD = re.compile(
    r"\bpublic\s+(?:(?:static|final|synchronized|abstract)\s+)*"
    r"(?:<[^>]*>\s*)?"
    r"(?!class\b|interface\b|enum\b|record\b)"
    rf"{_RETURN_TYPE}\s+(?P<name>\w+)\s*\("
)

EXCEPTION_TEMPLATES: list[re.Pattern[str]] = [
    re.compile(r"\bthrow\s+new\s+(\w+(?:Exception|Error))\b"),
    re.compile(r"\borElseThrow\s*\(\s*\(\s*\)\s*->\s*new\s+(\w+)"),
    re.compile(r"\borElseThrow\s*\(\s*(\w+)\s*::\s*new\b"),
]

TRANSACTIONAL = re.compile(r"@Transactional\b")


@dataclass(frozen=True)
class ServiceSummary:
    service: str
    is_transactional: bool = False
    repository_dependencies: list[str] = field(default_factory=list)
    public_methods: list[str] = field(default_factory=list)
    exception_types: list[str] = field(default_factory=list)
    found: bool = True

    @property
    def test_recommendation(self) -> dict[str, str]:
        setup = f"Autowire: {self.service}"
        if self.repository_dependencies:
            setup += f" and {', '.join(self.repository_dependencies)}"
        if self.exception_types:
            exceptions = f"Write tests for {', '.join(self.exception_types)}"
        else:
            exceptions = "No explicit exception tests needed"
        return {
            "setup": setup,
            "happyPath": f"Test {len(self.public_methods)} public methods",
            "exceptions": exceptions,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "service": self.service,
            "isTransactional": self.is_transactional,
            "repositoryDependencies": list(self.repository_dependencies),
            "publicMethodCount": len(self.public_methods),
            "publicMethods": list(self.public_methods),
            "exceptionTypes": list(self.exception_types),
            "testRecommendation": self.test_recommendation,
        }


def _ordered_hits(patterns: list[re.Pattern[str]], text: str) -> list[str]:
    hits = sorted(
        (m.start(), m.group(1))
        for pattern in patterns
        for m in pattern.finditer(text)
    )
    return unique(name for _, name in hits)


def scan_service(text: str) -> tuple[list[str], list[str], list[str]]:
    """Return (repository types, public method names, exception types)."""
    masked = mask(text)
    repositories = _ordered_hits(REPOSITORY_FIELD_TEMPLATES, masked)
    methods = [m.group("name") for m in PUBLIC_METHOD.finditer(masked)]
    exceptions = _ordered_hits(EXCEPTION_TEMPLATES, masked)
    return repositories, methods, exceptions


@extractor
def extract_service_dependencies(
    root: Path | str, service_name: str
) -> ServiceSummary | NotFound:
    corpus = locate(root, service_name)
    if not corpus.first:
        return NotFound(message=f"Service {service_name} not found")

    text = strip_comments(read_source(corpus.first))
    repositories, methods, exceptions = scan_service(text)
    logger.debug(
        "service analyzed",
        service=service_name,
        repositories=len(repositories),
        methods=len(methods),
        exceptions=len(exceptions),
    )
    return ServiceSummary(
        service=service_name,
        is_transactional=TRANSACTIONAL.search(text) is not None,
        repository_dependencies=repositories,
        public_methods=methods,
        exception_types=exceptions,
    )
