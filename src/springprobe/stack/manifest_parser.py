"""Parse pom.xml into Spring Boot and Java levels."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from springprobe.errors import ManifestParseError

logger = structlog.get_logger(__name__)

POM_FILE = "pom.xml"

SPRING_BOOT_GROUP = "org.springframework.boot"
SPRING_BOOT_BOM = "spring-boot-dependencies"

# java level properties, most specific first
JAVA_LEVEL_PROPERTIES = (
    "java.version",
    "maven.compiler.source",
    "maven.compiler.release",
)

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


@dataclass
class RawCoordinate:
    group_id: str
    artifact_id: str
    version: str


@dataclass
class RawManifest:
    parent: RawCoordinate | None = None
    properties: dict[str, str] = field(default_factory=dict)
    managed_imports: list[RawCoordinate] = field(default_factory=list)
    source: str = POM_FILE

    def resolve(self, value: str) -> str:
        """Expand ``${prop}`` placeholders from ``<properties>``.

        Unknown placeholders are left as written.
        """
        for _ in range(10):
            expanded = _PLACEHOLDER.sub(
                lambda m: self.properties.get(m.group(1), m.group(0)), value
            )
            if expanded == value:
                break
            value = expanded
        return value

    def property(self, name: str) -> str | None:
        value = self.properties.get(name)
        return self.resolve(value) if value else None


def parse_pom(root: Path) -> RawManifest:
    """Read the parts of ``pom.xml`` that decide framework and language
    levels.

    Raises:
        ManifestParseError: if the file is missing, unreadable or not XML
    """
    path = root / POM_FILE
    try:
        document = ET.fromstring(path.read_bytes())
    except (OSError, ValueError, LookupError, ET.ParseError) as e:
        logger.warning("failed to parse pom.xml", path=str(path), error=str(e))
        raise ManifestParseError(f"Could not parse {path}: {e}") from e

    ns = _detect_xml_namespace(document)

    def tag(name: str) -> str:
        return f"{{{ns}}}{name}" if ns else name

    def coordinate(element: ET.Element) -> RawCoordinate:
        return RawCoordinate(
            group_id=(element.findtext(tag("groupId")) or "").strip(),
            artifact_id=(element.findtext(tag("artifactId")) or "").strip(),
            version=(element.findtext(tag("version")) or "").strip(),
        )

    manifest = RawManifest(source=str(path))

    parent = document.find(tag("parent"))
    if parent is not None:
        manifest.parent = coordinate(parent)

    properties = document.find(tag("properties"))
    if properties is not None:
        for prop in properties:
            if not isinstance(prop.tag, str):
                continue
            name = prop.tag.split("}", 1)[-1]
            manifest.properties[name] = (prop.text or "").strip()

    managed = document.find(
        f"{tag('dependencyManagement')}/{tag('dependencies')}"
    )
    if managed is not None:
        for dep in managed.findall(tag("dependency")):
            if (dep.findtext(tag("scope")) or "").strip() == "import":
                manifest.managed_imports.append(coordinate(dep))

    logger.debug(
        "parsed pom.xml",
        path=str(path),
        parent=manifest.parent.artifact_id if manifest.parent else None,
        properties=len(manifest.properties),
    )
    return manifest


def spring_boot_version(manifest: RawManifest) -> str | None:
    """Spring Boot version declared by the manifest, if any.

    Looks at a Spring Boot parent, then the ``spring-boot.version``
    property, then an imported Spring Boot BOM, then any parent.
    """
    parent = manifest.parent
    if parent and parent.group_id == SPRING_BOOT_GROUP and parent.version:
        return manifest.resolve(parent.version)

    prop = manifest.property("spring-boot.version")
    if prop:
        return prop

    for bom in manifest.managed_imports:
        if bom.artifact_id == SPRING_BOOT_BOM and bom.version:
            return manifest.resolve(bom.version)

    if parent and parent.version:
        return manifest.resolve(parent.version)
    return None


def java_version(manifest: RawManifest) -> str | None:
    for name in JAVA_LEVEL_PROPERTIES:
        value = manifest.property(name)
        if value:
            return value
    return None


def _detect_xml_namespace(element: ET.Element) -> str | None:
    match = re.match(r"\{(.+)}", element.tag)
    return match.group(1) if match else None
