"""Immutable version snapshots of requirements and test cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rqmt_redline.models.enums import RequirementStatus, RequirementType


class RequirementVersion(BaseModel):
    """A versioned snapshot of a requirement."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    requirement_id: int
    version: int = Field(ge=1)
    title: str
    description: str | None = None
    type: RequirementType
    status: RequirementStatus
    parent_id: int | None = None
    modified_by: int = 0
    modified_at: datetime | None = None

    @property
    def entity_id(self) -> int:
        """ID of the requirement this snapshot belongs to."""
        return self.requirement_id


class TestCaseVersion(BaseModel):
    """A versioned snapshot of a test case."""

    __test__ = False
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    test_case_id: int
    version: int = Field(ge=1)
    title: str
    description: str | None = None
    steps: str | None = None
    expected_result: str | None = None
    modified_by: int = 0
    modified_at: datetime | None = None

    @property
    def entity_id(self) -> int:
        """ID of the test case this snapshot belongs to."""
        return self.test_case_id
