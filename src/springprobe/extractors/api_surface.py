"""Routing surface of a single controller.

Routing annotations are matched on masked text (literals blanked, offsets
kept) so parentheses inside path strings never end an argument list early;
path literals are then read back from the unmasked text at the same
offsets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate, read_source
from springprobe.extractors._text import mask, strip_comments
from springprobe.extractors.base import NotFound, extractor

logger = structlog.get_logger(__name__)

_ARGS = r"\((?:[^()]|\([^()]*\))*\)"

MAPPING_TEMPLATE = re.compile(
    rf"@(?P<kind>Get|Post|Put|Delete|Patch|Request)Mapping\b"
    rf"(?P<args>\s*{_ARGS})?"
)

# everything between a mapping and the handler's name: further
# annotations, modifiers, type parameters and the return type
HANDLER_TEMPLATE = re.compile(
    rf"(?:\s*@[\w.]+(?:\s*{_ARGS})?)*\s*"
    r"(?:(?:public|protected|private|static|final|synchronized)\s+)*"
    r"(?:<[^>]*>\s*)?"
    r"[\w.$]+(?:\s*<[^;{()]*>)?(?:\s*\[\s*\])*\s+"
    r"(?P<name>\w+)\s*\("
)

CLASS_DECLARATION = re.compile(r"\b(?:class|interface)\s+\w+")
STRING_LITERAL = re.compile(r"\"((?:\\.|[^\"\\])*)\"")
REQUEST_METHOD = re.compile(r"\bRequestMethod\s*\.\s*(\w+)")

ACCESS_CONTROL = re.compile(r"@(?:PreAuthorize|Secured|RolesAllowed)\b")
PERMIT_ALL = re.compile(r"@PermitAll\b")

ANY_METHOD = "ANY"

# (verb, relative path, handler name)
ScannedEndpoint = tuple[str, str, str | None]


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    handler_method: str | None
    full_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "path": self.path,
            "handlerMethod": self.handler_method,
            "fullPath": self.full_path,
        }


@dataclass(frozen=True)
class ControllerSurface:
    controller: str
    base_path: str = ""
    requires_auth: bool = True
    endpoints: list[Endpoint] = field(default_factory=list)
    found: bool = True

    def to_dict(self) -> dict[str, Any]:
        count = len(self.endpoints)
        auth = (
            "Write auth tests first (401 unauthorized)"
            if self.requires_auth
            else "No auth required"
        )
        return {
            "found": True,
            "controller": self.controller,
            "basePath": self.base_path,
            "requiresAuth": self.requires_auth,
            "endpointCount": count,
            "endpoints": [e.to_dict() for e in self.endpoints],
            "testRecommendation": {
                "authTests": auth,
                "crudTests": f"Write tests for {count} endpoints",
            },
        }


def join_paths(base: str, path: str) -> str:
    """Join two URL fragments with exactly one slash between them."""
    parts = [p.strip("/") for p in (base, path) if p.strip("/")]
    return "/" + "/".join(parts)


def _first_literal(text: str, start: int, end: int) -> str:
    m = STRING_LITERAL.search(text, start, end)
    return m.group(1) if m else ""


def _verb(kind: str, args: str) -> str:
    if kind != "Request":
        return kind.upper()
    m = REQUEST_METHOD.search(args)
    return m.group(1).upper() if m else ANY_METHOD


def scan_endpoints(text: str) -> tuple[str, list[ScannedEndpoint]]:
    """Return the class-level base path and (verb, path, handler) triples.

    A ``@RequestMapping`` placed before the class declaration sets the base
    path; every mapping after it is a handler mapping.
    """
    masked = mask(text)
    declaration = CLASS_DECLARATION.search(masked)
    class_start = declaration.start() if declaration else 0

    base_path = ""
    endpoints: list[ScannedEndpoint] = []
    for m in MAPPING_TEMPLATE.finditer(masked):
        args_start, args_end = m.span("args")
        has_args = m.group("args") is not None
        path = _first_literal(text, args_start, args_end) if has_args else ""

        if m.start() < class_start:
            if m.group("kind") == "Request":
                base_path = path
            continue

        handler = HANDLER_TEMPLATE.match(masked, m.end())
        endpoints.append(
            (
                _verb(m.group("kind"), m.group("args") or ""),
                path,
                handler.group("name") if handler else None,
            )
        )
    return base_path, endpoints


@extractor
def extract_api_surface(
    root: Path | str, controller_name: str
) -> ControllerSurface | NotFound:
    """Summarize a controller's endpoints and whether they need auth."""
    corpus = locate(root, controller_name)
    if not corpus.first:
        return NotFound(message=f"Controller {controller_name} not found")

    text = strip_comments(read_source(corpus.first))
    base_path, scanned = scan_endpoints(text)
    requires_auth = (
        ACCESS_CONTROL.search(text) is not None
        or PERMIT_ALL.search(text) is None
    )
    endpoints = [
        Endpoint(
            method=verb,
            path=path,
            handler_method=handler,
            full_path=join_paths(base_path, path),
        )
        for verb, path, handler in scanned
    ]
    logger.debug(
        "controller analyzed",
        controller=controller_name,
        base_path=base_path,
        endpoints=len(endpoints),
    )
    return ControllerSurface(
        controller=controller_name,
        base_path=base_path,
        requires_auth=requires_auth,
        endpoints=endpoints,
    )
