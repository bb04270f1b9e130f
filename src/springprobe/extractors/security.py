"""JWT claim structure from token utilities and request filters."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import locate_any, read_source
from springprobe.extractors._text import strip_comments
from springprobe.extractors.base import NotFound, extractor, unique

logger = structlog.get_logger(__name__)

# name families scanned together; results are merged across all matches
JWT_FILE_PATTERNS = [
    "*JwtTokenUtil*",
    "*JwtRequestFilter*",
    "*JwtUtil*",
    "*JwtService*",
    "*JwtTokenProvider*",
    "*JwtAuthenticationFilter*",
]

# registered claim -> accessor on io.jsonwebtoken.Claims
STANDARD_CLAIM_ACCESSORS: dict[str, str] = {
    "sub": "getSubject",
    "jti": "getId",
    "iss": "getIssuer",
    "aud": "getAudience",
    "exp": "getExpiration",
    "iat": "getIssuedAt",
    "nbf": "getNotBefore",
}


def _accessor_templates(accessor: str) -> list[re.Pattern[str]]:
    return [
        # claims.getSubject()
        re.compile(rf"\b(\w+)\s*\.\s*{accessor}\s*\(\s*\)"),
        # getClaimFromToken(token, Claims::getSubject)
        re.compile(rf"\b(\w+)\s*::\s*{accessor}\b"),
    ]


STANDARD_CLAIM_TEMPLATES: list[tuple[str, list[re.Pattern[str]]]] = [
    (claim, _accessor_templates(accessor))
    for claim, accessor in STANDARD_CLAIM_ACCESSORS.items()
]

# claim-bag lookups carrying a string literal key
CUSTOM_CLAIM_TEMPLATES: list[re.Pattern[str]] = [
    # claims.get("tenant_id") / claims.get("roles", List.class)
    re.compile(r"\.get\s*\(\s*['\"]([\w.:-]+)['\"]\s*[,)]"),
    # jwt.getClaim("email")
    re.compile(r"\.getClaim\s*\(\s*['\"]([\w.:-]+)['\"]\s*[,)]"),
    # Jwts.builder().claim("roles", roles)
    re.compile(r"\.claim\s*\(\s*['\"]([\w.:-]+)['\"]\s*,"),
    # claims.put("userId", id)
    re.compile(r"\bclaims\s*\.\s*put\s*\(\s*['\"]([\w.:-]+)['\"]\s*,"),
]


@dataclass(frozen=True)
class ClaimStructure:
    """Claims production code reads from or writes to a token."""

    standard_claims: dict[str, str] = field(default_factory=dict)
    custom_claims: list[str] = field(default_factory=list)
    found: bool = True

    @property
    def recommendation(self) -> str:
        return (
            "Include these claims in BaseIntegrationTest.generateTestToken()"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "standardClaims": dict(self.standard_claims),
            "customClaims": list(self.custom_claims),
            "recommendation": self.recommendation,
        }


def scan_claims(texts: list[str]) -> tuple[dict[str, str], list[str]]:
    """Apply claim templates to every text, merging results in order.

    Returns:
        (standard claim -> first accessor expression seen,
         custom claim names in first-seen order)
    """
    standard: dict[str, str] = {}
    custom: list[str] = []

    for text in texts:
        for claim, templates in STANDARD_CLAIM_TEMPLATES:
            if claim in standard:
                continue
            for template in templates:
                m = template.search(text)
                if m:
                    standard[claim] = re.sub(r"\s+", "", m.group(0))
                    break

        hits = [
            (m.start(), m.group(1))
            for template in CUSTOM_CLAIM_TEMPLATES
            for m in template.finditer(text)
        ]
        custom.extend(name for _, name in sorted(hits))

    return standard, unique(custom)


@extractor
def extract_security_claims(root: Path | str) -> ClaimStructure | NotFound:
    """Extract the JWT claim structure a project's security code expects.

    Scans every file in the token-utility and request-filter families and
    merges what it finds.
    """
    corpus = locate_any(root, JWT_FILE_PATTERNS)
    if not corpus:
        return NotFound(
            message=(
                "No JWT utility files found. Search for files containing "
                "'Jwt'"
            )
        )

    texts = [strip_comments(read_source(p)) for p in corpus.paths]
    standard, custom = scan_claims(texts)
    logger.debug(
        "claims extracted",
        files=len(texts),
        standard=len(standard),
        custom=len(custom),
    )
    return ClaimStructure(
        standard_claims=standard,
        custom_claims=custom,
    )
