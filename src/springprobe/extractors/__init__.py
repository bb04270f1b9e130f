"""Fact extractors: each turns located Java sources into a flat summary.

Every public ``extract_*`` function returns a result object with a
``found`` flag and a ``to_dict()`` for serialization; none of them raise.
"""

from springprobe.extractors.api_surface import extract_api_surface
from springprobe.extractors.base import ExtractionResult, NotFound
from springprobe.extractors.entities import extract_entity_relationships
from springprobe.extractors.exclusions import extract_exclusion_candidates
from springprobe.extractors.manifest import extract_manifest_info
from springprobe.extractors.naming import extract_naming_strategy
from springprobe.extractors.properties import extract_missing_properties
from springprobe.extractors.repositories import extract_repository_queries
from springprobe.extractors.response_wrapper import extract_response_wrapper
from springprobe.extractors.security import extract_security_claims
from springprobe.extractors.services import extract_service_dependencies

__all__ = [
    "ExtractionResult",
    "NotFound",
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
]
