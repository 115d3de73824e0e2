"""rm_redline MCP tool — field-level diff between two versions."""

import logging
from typing import Annotated, Literal

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field, TypeAdapter

from rqmt_redline.config import is_strict_redline
from rqmt_redline.errors import RedlineError
from rqmt_redline.models.enums import EntityKind
from rqmt_redline.models.redline import RedlineResult
from rqmt_redline.redline import service
from rqmt_redline.store.version_store import VersionStore
from rqmt_redline.tools.formatters import format_redline_text

logger = logging.getLogger(__name__)

OutputFormat = Literal["json", "text"]

_results_adapter = TypeAdapter(list[RedlineResult])


async def redline_versions(
    versions: VersionStore,
    kind: EntityKind,
    old_version_id: int,
    new_version_id: int,
    output: OutputFormat = "json",
    *,
    strict: bool = False,
) -> str:
    """Redline two versions by ID and render the result."""
    try:
        if kind == EntityKind.REQUIREMENT:
            result = await service.redline_requirement(
                versions, old_version_id, new_version_id, require_same_entity=strict
            )
        else:
            result = await service.redline_test_case(
                versions, old_version_id, new_version_id, require_same_entity=strict
            )
    except RedlineError as e:
        return f"Error: {e}"

    if output == "text":
        return format_redline_text(result)
    return result.to_json()


async def redline_history(
    versions: VersionStore,
    kind: EntityKind,
    entity_id: int,
    output: OutputFormat = "json",
) -> str:
    """Redline each adjacent pair of an entity's versions."""
    if kind == EntityKind.REQUIREMENT:
        results = await service.requirement_history(versions, entity_id)
    else:
        results = await service.test_case_history(versions, entity_id)

    if output == "text":
        if not results:
            return f"No version history to compare for {kind.value} {entity_id}."
        return "\n\n".join(format_redline_text(r) for r in results)
    return _results_adapter.dump_json(results, by_alias=True).decode()


def register_rm_redline(mcp: FastMCP) -> None:
    """Register the rm_redline tool with the MCP server."""

    @mcp.tool()
    async def rm_redline(
        kind: Annotated[EntityKind, Field(description="requirement or test_case")],
        old_version_id: Annotated[
            int | None, Field(description="Version ID to compare from")
        ] = None,
        new_version_id: Annotated[
            int | None, Field(description="Version ID to compare to")
        ] = None,
        entity_id: Annotated[
            int | None,
            Field(description="Requirement/test case ID, used with history=true"),
        ] = None,
        history: Annotated[
            bool,
            Field(description="Redline every consecutive pair of versions of entity_id"),
        ] = False,
        output: Annotated[
            OutputFormat,
            Field(description="json (oldVersion/newVersion/changes) or text"),
        ] = "json",
        ctx: Context | None = None,
    ) -> str:
        """Compare two versions of a requirement or test case field by field.

        Reports every field whose value differs, classified as Added (was empty),
        Removed (now empty) or Modified. Requirements compare Title, Description,
        Type, Status and ParentId; test cases compare Title, Description, Steps
        and ExpectedResult. Version IDs come from rm_versions.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        versions: VersionStore = ctx.lifespan_context["versions"]

        if history:
            if entity_id is None:
                return "Error: entity_id is required when history is true."
            return await redline_history(versions, kind, entity_id, output)

        if old_version_id is None or new_version_id is None:
            return "Error: old_version_id and new_version_id are required."
        return await redline_versions(
            versions,
            kind,
            old_version_id,
            new_version_id,
            output,
            strict=is_strict_redline(),
        )
