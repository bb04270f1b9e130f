"""Pydantic models for MCP tool responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolAvailability(BaseModel):
    """Whether a host tool answered its version command."""

    available: bool = False
    version: str = Field(default="", description="Parsed version, or empty")


class ContainerInfo(BaseModel):
    """Detected container runtime."""

    runtime: str = Field(
        default="none", description="docker, podman, or none"
    )
    version: str = ""


class EnvironmentReport(BaseModel):
    """Host readiness for compiling and testing a Maven project."""

    model_config = ConfigDict(populate_by_name=True)

    platform: str = Field(description="Host platform, e.g. linux or win32")
    maven: ToolAvailability
    java: ToolAvailability
    container: ContainerInfo
    maven_wrapper: bool | None = Field(
        default=None,
        alias="mavenWrapper",
        description="Project ships mvnw; only set when a project is given",
    )
    recommendations: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
