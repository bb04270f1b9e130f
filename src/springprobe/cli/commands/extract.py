"""Extraction commands - print one source fact summary as JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from springprobe.cli._common import emit, resolve_project
from springprobe.extractors import (
    extract_api_surface,
    extract_entity_relationships,
    extract_exclusion_candidates,
    extract_manifest_info,
    extract_missing_properties,
    extract_naming_strategy,
    extract_repository_queries,
    extract_response_wrapper,
    extract_security_claims,
    extract_service_dependencies,
)

_DIRECTORY_HELP = "Project root (default: current directory)"


@dataclass
class Claims:
    """JWT claim structure from token utilities and filters."""

    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        emit(extract_security_claims(resolve_project(self.directory)).to_dict())
        return 0


@dataclass
class Wrapper:
    """Whether controller responses are wrapped by a ResponseBodyAdvice."""

    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_response_wrapper(resolve_project(self.directory))
        emit(result.to_dict())
        return 0


@dataclass
class Entity:
    """Relationships and creation order for one JPA entity."""

    name: str = field(metadata={"help": "Entity class name"})
    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_entity_relationships(
            resolve_project(self.directory), self.name
        )
        emit(result.to_dict())
        return 0


@dataclass
class Controller:
    """Endpoints and auth requirement of one controller."""

    name: str = field(metadata={"help": "Controller class name"})
    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_api_surface(resolve_project(self.directory), self.name)
        emit(result.to_dict())
        return 0


@dataclass
class Repository:
    """Query methods of one Spring Data repository."""

    name: str = field(metadata={"help": "Repository interface name"})
    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_repository_queries(
            resolve_project(self.directory), self.name
        )
        emit(result.to_dict())
        return 0


@dataclass
class Service:
    """Repositories, public methods and exceptions of one service."""

    name: str = field(metadata={"help": "Service class name"})
    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_service_dependencies(
            resolve_project(self.directory), self.name
        )
        emit(result.to_dict())
        return 0


@dataclass
class Naming:
    """JSON naming strategy used across a DTO package."""

    package: str = field(
        metadata={"help": "Dotted DTO package, e.g. com.example.dto"}
    )
    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_naming_strategy(
            resolve_project(self.directory), self.package
        )
        emit(result.to_dict())
        return 0


@dataclass
class Properties:
    """@Value keys missing from application-test.properties."""

    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_missing_properties(resolve_project(self.directory))
        emit(result.to_dict())
        return 0


@dataclass
class Exclusions:
    """Provider-facing beans without a @Profile guard."""

    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_exclusion_candidates(resolve_project(self.directory))
        emit(result.to_dict())
        return 0


@dataclass
class Version:
    """Spring Boot and Java levels from pom.xml."""

    directory: Path | None = field(
        default=None, metadata={"help": _DIRECTORY_HELP}
    )

    def run(self) -> int:
        result = extract_manifest_info(resolve_project(self.directory))
        emit(result.to_dict())
        return 0
