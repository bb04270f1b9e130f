"""Source fact extraction tools for springprobe MCP.

Every tool resolves the project path, runs one extractor in a worker
thread and returns its summary dict. Extractors report absence as
``found: false`` rather than raising.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

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
from springprobe_mcp.server.utils import require

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from springprobe_mcp.server.state import ServerState


def register_extraction_tools(
    mcp: FastMCP,
    state: ServerState,
    tool_if_enabled: Callable,
) -> None:
    """Register all source extraction tools.

    Args:
        mcp: FastMCP server instance
        state: Server state with workspace settings
        tool_if_enabled: Decorator for conditional tool registration
    """

    # -----------------------------------------------------------------
    # security
    # -----------------------------------------------------------------

    @tool_if_enabled
    async def investigate_jwt_claims(projectPath: str) -> dict[str, Any]:
        """Extract the JWT claim structure the security code expects.

        Scans JWT token utilities and request filters for standard claim
        accessors (getSubject, getExpiration, ...) and custom claim keys.

        Args:
            projectPath: Project root

        Returns:
            found, standardClaims, customClaims and a recommendation
        """
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_security_claims, root)

    # -----------------------------------------------------------------
    # web
    # -----------------------------------------------------------------

    @tool_if_enabled
    async def investigate_response_wrapper(
        projectPath: str,
    ) -> dict[str, Any]:
        """Check whether controller responses are wrapped by an advice.

        Use the returned jsonPathPrefix when asserting on response bodies.

        Args:
            projectPath: Project root

        Returns:
            hasWrapper, wrapperClass, wrapperField and jsonPathPrefix
        """
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_response_wrapper, root)

    @tool_if_enabled
    async def analyze_controller(
        projectPath: str,
        controllerName: str,
    ) -> dict[str, Any]:
        """List a controller's endpoints and whether they require auth.

        Args:
            projectPath: Project root
            controllerName: Controller class name, e.g. UserController

        Returns:
            basePath, requiresAuth, endpoints (method, path, handler,
            fullPath) and test recommendations
        """
        name = require(controllerName, "controllerName")
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_api_surface, root, name)

    @tool_if_enabled
    async def check_json_naming_strategy(
        projectPath: str,
        dtoPackage: str,
    ) -> dict[str, Any]:
        """Detect whether DTOs serialize as snake_case or camelCase.

        Args:
            projectPath: Project root
            dtoPackage: Dotted DTO package, e.g. com.example.api.dto

        Returns:
            Per-strategy file counts and the primary strategy
        """
        package = require(dtoPackage, "dtoPackage")
        root = state.resolve(projectPath)
        return await state.run_extractor(
            extract_naming_strategy, root, package
        )

    # -----------------------------------------------------------------
    # persistence
    # -----------------------------------------------------------------

    @tool_if_enabled
    async def investigate_entity_relationships(
        projectPath: str,
        entityName: str,
    ) -> dict[str, Any]:
        """Map an entity's JPA relationships and a safe creation order.

        Args:
            projectPath: Project root
            entityName: Entity class name, e.g. Order

        Returns:
            relationships, inheritance, discriminator, creationOrder and
            an inheritance warning when relevant
        """
        name = require(entityName, "entityName")
        root = state.resolve(projectPath)
        return await state.run_extractor(
            extract_entity_relationships, root, name
        )

    @tool_if_enabled
    async def analyze_repository(
        projectPath: str,
        repositoryName: str,
    ) -> dict[str, Any]:
        """List a repository's query methods and soft-delete filtering.

        Args:
            projectPath: Project root
            repositoryName: Repository interface name, e.g. UserRepository

        Returns:
            queryMethods (custom/native flags), hasSoftDelete and test
            recommendations
        """
        name = require(repositoryName, "repositoryName")
        root = state.resolve(projectPath)
        return await state.run_extractor(
            extract_repository_queries, root, name
        )

    @tool_if_enabled
    async def investigate_service(
        projectPath: str,
        serviceName: str,
    ) -> dict[str, Any]:
        """Summarize a service's repositories, public API and exceptions.

        Args:
            projectPath: Project root
            serviceName: Service class name, e.g. UserService

        Returns:
            isTransactional, repositoryDependencies, publicMethods,
            exceptionTypes and test recommendations
        """
        name = require(serviceName, "serviceName")
        root = state.resolve(projectPath)
        return await state.run_extractor(
            extract_service_dependencies, root, name
        )

    # -----------------------------------------------------------------
    # config
    # -----------------------------------------------------------------

    @tool_if_enabled
    async def find_missing_properties(projectPath: str) -> dict[str, Any]:
        """Find @Value property keys missing from test configuration.

        Compares against src/test/resources/application-test.properties.

        Args:
            projectPath: Project root

        Returns:
            totalProperties, missingProperties, testPropertiesFileExists
            and the action to take
        """
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_missing_properties, root)

    @tool_if_enabled
    async def find_beans_needing_exclusion(
        projectPath: str,
    ) -> dict[str, Any]:
        """Find cloud/messaging beans without a @Profile guard.

        These usually need @Profile("!test") so the test context starts
        without AWS, secrets or queue infrastructure.

        Args:
            projectPath: Project root

        Returns:
            count, beansToExclude (file, path, matched keywords) and the
            action to take
        """
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_exclusion_candidates, root)

    @tool_if_enabled
    async def check_spring_boot_version(projectPath: str) -> dict[str, Any]:
        """Read Spring Boot and Java levels from pom.xml.

        Args:
            projectPath: Project root

        Returns:
            springBootVersion, javaVersion, persistence namespace and
            dependency recommendations, or error/message when pom.xml
            cannot be parsed
        """
        root = state.resolve(projectPath)
        return await state.run_extractor(extract_manifest_info, root)
