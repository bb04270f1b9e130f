"""springprobe - compact facts about Spring Boot projects for test writing."""

from springprobe.build import run_tests, validate_compile
from springprobe.corpus import SourceCorpus, locate, locate_any
from springprobe.errors import (
    ManifestParseError,
    ProjectNotFoundError,
    SpringProbeError,
)
from springprobe.extractors import (
    ExtractionResult,
    NotFound,
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

__version__ = "0.1.0"

__all__ = [
    "ExtractionResult",
    "ManifestParseError",
    "NotFound",
    "ProjectNotFoundError",
    "SourceCorpus",
    "SpringProbeError",
    "extract_api_surface",
    "extract_entity_relationships",
    "extract_exclusion_candidates",
    "extract_manifest_info",
    "extract_missing_properties",
    "extract_naming_strategy",
    "extract_repository_queries",
    "extract_response_wrapper",
    "extract_security_claims",
    "extract_service_dependencies",
    "locate",
    "locate_any",
    "run_tests",
    "validate_compile",
]
