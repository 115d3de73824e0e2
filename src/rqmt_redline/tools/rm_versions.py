"""rm_versions MCP tool — version history listing and lookup."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from rqmt_redline.models.enums import EntityKind
from rqmt_redline.store.version_store import VersionStore
from rqmt_redline.tools.formatters import (
    format_requirement_version,
    format_result_list,
    format_test_case_version,
)

logger = logging.getLogger(__name__)


async def list_versions(versions: VersionStore, kind: EntityKind, entity_id: int) -> str:
    """All versions of one entity, oldest first."""
    if kind == EntityKind.REQUIREMENT:
        formatted = [
            format_requirement_version(v) for v in await versions.get_requirement_versions(entity_id)
        ]
    else:
        formatted = [
            format_test_case_version(v) for v in await versions.get_test_case_versions(entity_id)
        ]
    return format_result_list(formatted, header=f"Version history of {kind.value} {entity_id}")


async def get_version(versions: VersionStore, kind: EntityKind, version_id: int) -> str:
    """A single version by its version ID."""
    if kind == EntityKind.REQUIREMENT:
        req_version = await versions.get_requirement_version(version_id)
        if req_version is not None:
            return format_requirement_version(req_version)
    else:
        tc_version = await versions.get_test_case_version(version_id)
        if tc_version is not None:
            return format_test_case_version(tc_version)
    return f"Error: {kind.value} version {version_id} not found"


def register_rm_versions(mcp: FastMCP) -> None:
    """Register the rm_versions tool with the MCP server."""

    @mcp.tool()
    async def rm_versions(
        kind: Annotated[EntityKind, Field(description="requirement or test_case")],
        entity_id: Annotated[
            int | None, Field(description="List every version of this requirement/test case")
        ] = None,
        version_id: Annotated[
            int | None, Field(description="Fetch a single version by its version ID")
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """List the version history of a requirement or test case, or fetch one version.

        Each line starts with [#<version_id>], the ID to pass to rm_redline.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        versions: VersionStore = ctx.lifespan_context["versions"]

        if version_id is not None:
            return await get_version(versions, kind, version_id)
        if entity_id is not None:
            return await list_versions(versions, kind, entity_id)
        return "Error: provide entity_id or version_id."
