"""rm_store_requirement / rm_store_test_case MCP tools — versioned saves."""

import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from rqmt_redline.errors import RedlineError
from rqmt_redline.models.entities import RequirementUpdate, TestCaseUpdate, TestStep
from rqmt_redline.models.enums import RequirementStatus, RequirementType
from rqmt_redline.store.requirement_store import RequirementStore
from rqmt_redline.store.test_case_store import TestCaseStore
from rqmt_redline.tools.formatters import format_requirement, format_test_case

logger = logging.getLogger(__name__)

_REQUIREMENT_CLEARABLE = {"description", "parent_id"}
_TEST_CASE_CLEARABLE = {"description", "steps", "expected_result", "suite_id"}


def _build_update(
    fields: dict[str, object], clear_fields: list[str] | None, clearable: set[str]
) -> dict[str, object]:
    """Keep provided fields; map each cleared field to an explicit None."""
    data = {k: v for k, v in fields.items() if v is not None}
    for name in clear_fields or []:
        if name not in clearable:
            raise ValueError(f"Cannot clear {name!r}; clearable: {', '.join(sorted(clearable))}")
        data[name] = None
    return data


async def save_requirement(
    store: RequirementStore,
    *,
    title: str | None = None,
    description: str | None = None,
    type: RequirementType | None = None,
    status: RequirementStatus | None = None,
    parent_id: int | None = None,
    user_id: int = 0,
    update_requirement_id: int | None = None,
    clear_fields: list[str] | None = None,
) -> str:
    """Create or update a requirement and describe the saved version."""
    if update_requirement_id is not None:
        try:
            data = _build_update(
                {
                    "title": title,
                    "description": description,
                    "type": type,
                    "status": status,
                    "parent_id": parent_id,
                },
                clear_fields,
                _REQUIREMENT_CLEARABLE,
            )
            requirement = await store.update_requirement(
                update_requirement_id, RequirementUpdate(**data), modified_by=user_id
            )
        except (RedlineError, ValueError) as e:
            return f"Error: {e}"
        return f"Updated {format_requirement(requirement)}"

    if not title:
        return "Error: title is required when creating a requirement."
    try:
        requirement = await store.create_requirement(
            title=title,
            type=type or RequirementType.CRS,
            status=status or RequirementStatus.DRAFT,
            description=description,
            parent_id=parent_id,
            created_by=user_id,
        )
    except RedlineError as e:
        return f"Error: {e}"
    return f"Created {format_requirement(requirement)}"


async def save_test_case(
    store: TestCaseStore,
    *,
    title: str | None = None,
    description: str | None = None,
    steps: str | list[TestStep] | None = None,
    expected_result: str | None = None,
    suite_id: int | None = None,
    user_id: int = 0,
    update_test_case_id: int | None = None,
    clear_fields: list[str] | None = None,
) -> str:
    """Create or update a test case and describe the saved version."""
    if update_test_case_id is not None:
        try:
            data = _build_update(
                {
                    "title": title,
                    "description": description,
                    "steps": steps,
                    "expected_result": expected_result,
                    "suite_id": suite_id,
                },
                clear_fields,
                _TEST_CASE_CLEARABLE,
            )
            test_case = await store.update_test_case(
                update_test_case_id, TestCaseUpdate(**data), modified_by=user_id
            )
        except (RedlineError, ValueError) as e:
            return f"Error: {e}"
        return f"Updated {format_test_case(test_case)}"

    if not title:
        return "Error: title is required when creating a test case."
    test_case = await store.create_test_case(
        title=title,
        description=description,
        steps=steps,
        expected_result=expected_result,
        suite_id=suite_id,
        created_by=user_id,
    )
    return f"Created {format_test_case(test_case)}"


def register_rm_store(mcp: FastMCP) -> None:
    """Register the rm_store_requirement and rm_store_test_case tools."""

    @mcp.tool()
    async def rm_store_requirement(
        title: Annotated[str | None, Field(description="Requirement title")] = None,
        description: Annotated[str | None, Field(description="Requirement text")] = None,
        type: Annotated[
            RequirementType | None,
            Field(description="CRS, PRS, SRS, UserStory, BusinessRule, EntityName"),
        ] = None,
        status: Annotated[
            RequirementStatus | None,
            Field(description="Draft, Approved, Implemented, Verified"),
        ] = None,
        parent_id: Annotated[int | None, Field(description="Parent requirement ID")] = None,
        user_id: Annotated[int, Field(description="ID of the user making the change")] = 0,
        update_requirement_id: Annotated[
            int | None, Field(description="ID of an existing requirement to update")
        ] = None,
        clear_fields: Annotated[
            list[str] | None,
            Field(description="Fields to empty on update: description, parent_id"),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Create or update a requirement.

        Every save records an immutable version snapshot (v1 on create, then
        v2, v3, ...) that rm_versions lists and rm_redline compares. On update
        only the fields you pass change.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: RequirementStore = ctx.lifespan_context["requirements"]
        return await save_requirement(
            store,
            title=title,
            description=description,
            type=type,
            status=status,
            parent_id=parent_id,
            user_id=user_id,
            update_requirement_id=update_requirement_id,
            clear_fields=clear_fields,
        )

    @mcp.tool()
    async def rm_store_test_case(
        title: Annotated[str | None, Field(description="Test case title")] = None,
        description: Annotated[str | None, Field(description="Test case description")] = None,
        steps: Annotated[
            str | list[TestStep] | None,
            Field(description="Steps as text, or a list of {description, expected_result}"),
        ] = None,
        expected_result: Annotated[
            str | None, Field(description="Overall expected result")
        ] = None,
        suite_id: Annotated[int | None, Field(description="Owning test suite ID")] = None,
        user_id: Annotated[int, Field(description="ID of the user making the change")] = 0,
        update_test_case_id: Annotated[
            int | None, Field(description="ID of an existing test case to update")
        ] = None,
        clear_fields: Annotated[
            list[str] | None,
            Field(
                description="Fields to empty on update: description, steps, expected_result, "
                "suite_id"
            ),
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Create or update a test case.

        Step lists are flattened to numbered lines before saving, so any step
        edit shows up as one Steps change in rm_redline.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        store: TestCaseStore = ctx.lifespan_context["test_cases"]
        return await save_test_case(
            store,
            title=title,
            description=description,
            steps=steps,
            expected_result=expected_result,
            suite_id=suite_id,
            user_id=user_id,
            update_test_case_id=update_test_case_id,
            clear_fields=clear_fields,
        )
