"""Current-state requirement and test case models."""

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from rqmt_redline.models.enums import RequirementStatus, RequirementType
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion


class Requirement(BaseModel):
    """A requirement in its latest saved state."""

    id: int | None = None
    title: str
    description: str | None = None
    type: RequirementType = RequirementType.CRS
    status: RequirementStatus = RequirementStatus.DRAFT
    parent_id: int | None = None
    version: int = Field(default=1, ge=1)
    created_by: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_version(self, modified_by: int, modified_at: datetime) -> RequirementVersion:
        """Snapshot the current field values at this requirement's version."""
        if self.id is None:
            raise ValueError("Requirement must be saved before it can be versioned")
        return RequirementVersion(
            requirement_id=self.id,
            version=self.version,
            title=self.title,
            description=self.description,
            type=self.type,
            status=self.status,
            parent_id=self.parent_id,
            modified_by=modified_by,
            modified_at=modified_at,
        )


class TestStep(BaseModel):
    """One action/outcome pair within a test case."""

    __test__ = False

    description: str
    expected_result: str = ""


def flatten_steps(steps: Iterable[TestStep]) -> str | None:
    """Render steps as numbered lines. Returns None for an empty list.

    The flattened text is what gets stored and compared, so reordering or
    editing any step shows up as a single change to the Steps field.
    """
    lines = []
    for n, step in enumerate(steps, start=1):
        line = f"{n}. {step.description}"
        if step.expected_result:
            line += f" => {step.expected_result}"
        lines.append(line)
    return "\n".join(lines) if lines else None


class TestCase(BaseModel):
    """A test case in its latest saved state."""

    __test__ = False

    id: int | None = None
    suite_id: int | None = None
    title: str
    description: str | None = None
    steps: str | None = None
    expected_result: str | None = None
    version: int = Field(default=1, ge=1)
    created_by: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_version(self, modified_by: int, modified_at: datetime) -> TestCaseVersion:
        """Snapshot the current field values at this test case's version."""
        if self.id is None:
            raise ValueError("Test case must be saved before it can be versioned")
        return TestCaseVersion(
            test_case_id=self.id,
            version=self.version,
            title=self.title,
            description=self.description,
            steps=self.steps,
            expected_result=self.expected_result,
            modified_by=modified_by,
            modified_at=modified_at,
        )


class RequirementUpdate(BaseModel):
    """Partial update. Only fields explicitly set are applied."""

    title: str | None = None
    description: str | None = None
    type: RequirementType | None = None
    status: RequirementStatus | None = None
    parent_id: int | None = None

    def changes(self) -> dict[str, object]:
        """Fields the caller set, dropping None for non-nullable columns."""
        data = self.model_dump(exclude_unset=True)
        for key in ("title", "type", "status"):
            if data.get(key, ...) is None:
                del data[key]
        return data


class TestCaseUpdate(BaseModel):
    """Partial update. Only fields explicitly set are applied."""

    __test__ = False

    suite_id: int | None = None
    title: str | None = None
    description: str | None = None
    steps: str | list[TestStep] | None = None
    expected_result: str | None = None

    def changes(self) -> dict[str, object]:
        """Fields the caller set, with step lists flattened to text."""
        data = self.model_dump(exclude_unset=True, exclude={"steps"})
        if data.get("title", ...) is None:
            del data["title"]
        if "steps" in self.model_fields_set:
            data["steps"] = (
                flatten_steps(self.steps) if isinstance(self.steps, list) else self.steps
            )
        return data
