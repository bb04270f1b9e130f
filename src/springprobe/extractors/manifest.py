"""Framework and language levels from the build manifest."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from springprobe.corpus import ensure_project_root
from springprobe.errors import ManifestParseError, ProjectNotFoundError
from springprobe.stack.manifest_parser import (
    java_version,
    parse_pom,
    spring_boot_version,
)

logger = structlog.get_logger(__name__)

UNKNOWN_VERSION = "Unknown"

_LEADING_INT = re.compile(r"\s*(\d+)")


def major(version: str) -> int | None:
    """Leading integer of a version string (``"3.2.1"`` -> 3)."""
    m = _LEADING_INT.match(version)
    return int(m.group(1)) if m else None


@dataclass(frozen=True)
class ManifestError:
    error: str = "Could not parse pom.xml"
    message: str = "Ensure pom.xml exists and is valid XML"
    found: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"found": False, "error": self.error, "message": self.message}


@dataclass(frozen=True)
class ManifestSummary:
    spring_boot_version: str
    java_version: str
    found: bool = True

    @property
    def is_spring_boot_3(self) -> bool:
        level = major(self.spring_boot_version)
        return level is not None and level >= 3

    @property
    def is_java_17_plus(self) -> bool:
        level = major(self.java_version)
        return level is not None and level >= 17

    @property
    def persistence_api(self) -> str:
        if self.is_spring_boot_3:
            return "jakarta.persistence.*"
        return "javax.persistence.*"

    @property
    def recommendations(self) -> dict[str, str]:
        modern_java = self.is_java_17_plus
        return {
            "imports": f"Use {self.persistence_api} imports",
            "testDependencies": (
                "Use JUnit 5.10+, Mockito 5.x+"
                if modern_java
                else "Use JUnit 5.11.4, Mockito 5.14.2 (Java 11 compatible)"
            ),
            "moduleOpens": (
                "Add --add-opens flags to maven-surefire-plugin"
                if modern_java
                else "Module opens optional but recommended for Orika"
            ),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": True,
            "springBootVersion": self.spring_boot_version,
            "javaVersion": self.java_version,
            "isSpringBoot3": self.is_spring_boot_3,
            "isJava17Plus": self.is_java_17_plus,
            "persistenceApi": self.persistence_api,
            "recommendations": self.recommendations,
        }


def extract_manifest_info(root: Path | str) -> ManifestSummary | ManifestError:
    """Read Spring Boot and Java levels from ``pom.xml``.

    Any failure to reach or parse the manifest is returned as a
    ManifestError result.
    """
    try:
        manifest = parse_pom(ensure_project_root(root))
    except (ProjectNotFoundError, ManifestParseError) as e:
        logger.info("manifest unavailable", error=str(e))
        return ManifestError()

    summary = ManifestSummary(
        spring_boot_version=spring_boot_version(manifest) or UNKNOWN_VERSION,
        java_version=java_version(manifest) or UNKNOWN_VERSION,
    )
    logger.debug(
        "manifest summarized",
        spring_boot=summary.spring_boot_version,
        java=summary.java_version,
    )
    return summary
