"""Tests for the rm_store_requirement / rm_store_test_case tool logic."""

import pytest

from rqmt_redline.models.entities import TestStep
from rqmt_redline.models.enums import RequirementStatus, RequirementType
from rqmt_redline.tools.rm_store import save_requirement, save_test_case


@pytest.mark.asyncio
async def test_create_requirement(requirements):
    result = await save_requirement(
        requirements, title="Login", type=RequirementType.USER_STORY, user_id=2
    )
    assert result == "Created requirement 1 (v1) | Login (Draft, UserStory)"


@pytest.mark.asyncio
async def test_create_requirement_needs_title(requirements):
    result = await save_requirement(requirements, description="no title")
    assert result.startswith("Error: title is required")


@pytest.mark.asyncio
async def test_update_requirement_only_passed_fields(requirements, versions):
    await save_requirement(requirements, title="Login", description="keep me")
    result = await save_requirement(
        requirements, update_requirement_id=1, status=RequirementStatus.APPROVED
    )
    assert result == "Updated requirement 1 (v2) | Login (Approved, CRS)"

    latest = await versions.get_latest_requirement_version(1)
    assert latest.description == "keep me"


@pytest.mark.asyncio
async def test_update_requirement_clear_fields(requirements):
    await save_requirement(requirements, title="Login", description="drop me")
    await save_requirement(requirements, update_requirement_id=1, clear_fields=["description"])
    req = await requirements.get_requirement(1)
    assert req.description is None


@pytest.mark.asyncio
async def test_update_requirement_bad_clear_field(requirements):
    await save_requirement(requirements, title="Login")
    result = await save_requirement(requirements, update_requirement_id=1, clear_fields=["title"])
    assert result.startswith("Error: Cannot clear 'title'")


@pytest.mark.asyncio
async def test_update_missing_requirement(requirements):
    result = await save_requirement(requirements, update_requirement_id=50, title="x")
    assert result == "Error: Requirement 50 not found"


@pytest.mark.asyncio
async def test_create_requirement_unknown_parent(requirements):
    result = await save_requirement(requirements, title="Child", parent_id=9)
    assert result == "Error: Parent requirement 9 not found"


@pytest.mark.asyncio
async def test_create_and_update_test_case(test_cases, versions):
    created = await save_test_case(
        test_cases, title="Login works", steps=[TestStep(description="Open")]
    )
    assert created == "Created test_case 1 (v1) | Login works"

    updated = await save_test_case(
        test_cases, update_test_case_id=1, clear_fields=["steps"], expected_result="ok"
    )
    assert updated == "Updated test_case 1 (v2) | Login works"

    v1, v2 = await versions.get_test_case_versions(1)
    assert v1.steps == "1. Open"
    assert v2.steps is None
    assert v2.expected_result == "ok"


@pytest.mark.asyncio
async def test_update_missing_test_case(test_cases):
    result = await save_test_case(test_cases, update_test_case_id=3, title="x")
    assert result == "Error: Test case 3 not found"
