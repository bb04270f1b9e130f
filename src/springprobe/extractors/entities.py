"""JPA entity relationship graph for a single entity.

Each relationship family is one template: the relationship annotation,
then any run of text that neither ends a declaration nor starts another
relationship annotation, then the field declaration it applies to. The
run in between (the "span") is where nullability markers live.
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

_RELATION_ANNOTATIONS = "ManyToOne|OneToMany|OneToOne|ManyToMany"

# anything up to the field, never crossing a declaration end or the next
# relationship
_SPAN = rf"(?P<span>(?:(?!@(?:{_RELATION_ANNOTATIONS})\b)[^;])*?)"
_MODIFIERS = r"(?:(?:private|protected|public)\s+)?(?:final\s+)?(?<![\w.@])"
_COLLECTION = r"(?:List|Set|Collection|SortedSet)"


def _to_one(annotation: str) -> re.Pattern[str]:
    return re.compile(
        rf"@{annotation}\b{_SPAN}{_MODIFIERS}"
        r"(?P<type>\w+)\s+(?P<field>\w+)\s*[;=]"
    )


def _to_many(annotation: str) -> re.Pattern[str]:
    return re.compile(
        rf"@{annotation}\b{_SPAN}{_MODIFIERS}"
        rf"{_COLLECTION}\s*<\s*(?P<type>\w+)\s*>\s+(?P<field>\w+)\s*[;=]"
    )


RELATIONSHIP_TEMPLATES: list[tuple[str, re.Pattern[str]]] = [
    ("manyToOne", _to_one("ManyToOne")),
    ("oneToMany", _to_many("OneToMany")),
    ("oneToOne", _to_one("OneToOne")),
    ("manyToMany", _to_many("ManyToMany")),
]

# an explicit "may be null" marker near the declaration
NULLABLE_MARKER = re.compile(r"\b(?:nullable|optional)\s*=\s*true\b")

INHERITANCE_TEMPLATE = re.compile(
    r"\bclass\s+\w+\s*(?:<[^>{]*>)?\s+extends\s+(\w+)"
)
DISCRIMINATOR_MARKER = re.compile(r"@DiscriminatorColumn\b")


@dataclass(frozen=True)
class Relationship:
    type: str
    field: str
    required: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "field": self.field}
        if self.required is not None:
            d["required"] = self.required
        return d


@dataclass(frozen=True)
class EntityGraph:
    entity: str
    relationships: dict[str, list[Relationship]] = field(default_factory=dict)
    inheritance: str | None = None
    discriminator: bool = False
    found: bool = True

    def _rels(self, kind: str) -> list[Relationship]:
        return self.relationships.get(kind, [])

    @property
    def creation_order(self) -> list[str]:
        """Dependencies first, then the entity, then its children."""
        return [
            *(
                f"1. Create {r.type} first (required dependency)"
                for r in self._rels("manyToOne")
            ),
            f"2. Create {self.entity}",
            *(
                f"3. Create {r.type} (children)"
                for r in self._rels("oneToMany")
            ),
        ]

    @property
    def warning(self) -> str | None:
        if not self.discriminator:
            return None
        return (
            "⚠️ This entity uses inheritance - use specific subclass, not "
            f"base {self.entity} class"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "entity": self.entity,
            "inheritance": self.inheritance,
            "discriminator": self.discriminator,
            "relationships": {
                kind: [r.to_dict() for r in self._rels(kind)]
                for kind, _ in RELATIONSHIP_TEMPLATES
            },
            "creationOrder": self.creation_order,
            "warning": self.warning,
        }


def is_required(span: str) -> bool:
    """Best-effort "required" inference for a to-one relationship.

    Only an explicit ``nullable = true`` / ``optional = true`` marks the
    relationship optional. A declaration with no nullability marker at all
    is reported as required, the opposite of JPA's own default.
    """
    return NULLABLE_MARKER.search(span) is None


def scan_relationships(text: str) -> dict[str, list[Relationship]]:
    found: dict[str, list[Relationship]] = {}
    for kind, template in RELATIONSHIP_TEMPLATES:
        rels: list[Relationship] = []
        for m in template.finditer(text):
            required = None
            if kind == "manyToOne":
                required = is_required(m.group("span"))
            rels.append(
                Relationship(
                    type=m.group("type"),
                    field=m.group("field"),
                    required=required,
                )
            )
        found[kind] = rels
    return found


@extractor
def extract_entity_relationships(
    root: Path | str, entity_name: str
) -> EntityGraph | NotFound:
    """Map the relationships of one entity without returning its source.

    Args:
        root: Project root
        entity_name: Entity class name (file-name glob, no extension)
    """
    corpus = locate(root, entity_name)
    if not corpus.first:
        return NotFound(message=f"Entity {entity_name} not found")

    text = strip_comments(read_source(corpus.first))
    relationships = scan_relationships(mask(text))
    inheritance = INHERITANCE_TEMPLATE.search(text)

    logger.debug(
        "entity relationships extracted",
        entity=entity_name,
        file=corpus.relative(corpus.first),
        counts={k: len(v) for k, v in relationships.items()},
    )
    return EntityGraph(
        entity=entity_name,
        relationships=relationships,
        inheritance=inheritance.group(1) if inheritance else None,
        discriminator=DISCRIMINATOR_MARKER.search(text) is not None,
    )
