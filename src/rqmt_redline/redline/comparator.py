"""Field-level diff of two version snapshots.

Each entity kind has a fixed, ordered list of comparable fields. Values are
reduced to their string form before comparison (enums by value, IDs via
``str``), and every differing field yields one ``FieldChange`` classified by
its None/non-None transition.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from operator import attrgetter
from typing import TypeVar

from rqmt_redline.errors import InvalidComparisonError
from rqmt_redline.models.redline import ChangeType, FieldChange, RedlineResult
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion

S = TypeVar("S", RequirementVersion, TestCaseVersion)

FieldSpec = tuple[str, Callable[[S], object]]

REQUIREMENT_FIELDS: tuple[FieldSpec[RequirementVersion], ...] = (
    ("Title", attrgetter("title")),
    ("Description", attrgetter("description")),
    ("Type", attrgetter("type")),
    ("Status", attrgetter("status")),
    ("ParentId", attrgetter("parent_id")),
)

TEST_CASE_FIELDS: tuple[FieldSpec[TestCaseVersion], ...] = (
    ("Title", attrgetter("title")),
    ("Description", attrgetter("description")),
    ("Steps", attrgetter("steps")),
    ("ExpectedResult", attrgetter("expected_result")),
)


def to_comparable(value: object) -> str | None:
    """Canonical string form of a field value; None stays None."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def classify(old_value: str | None, new_value: str | None) -> ChangeType:
    """Classify a difference by which side is absent."""
    if old_value is None:
        return ChangeType.ADDED
    if new_value is None:
        return ChangeType.REMOVED
    return ChangeType.MODIFIED


def diff_fields(old: S, new: S, fields: Sequence[FieldSpec[S]]) -> list[FieldChange]:
    """Compare ``fields`` in order and return a change for each that differs."""
    changes: list[FieldChange] = []
    for name, extract in fields:
        old_value = to_comparable(extract(old))
        new_value = to_comparable(extract(new))
        if old_value == new_value:
            continue
        changes.append(
            FieldChange(
                field=name,
                old_value=old_value,
                new_value=new_value,
                change_type=classify(old_value, new_value),
            )
        )
    return changes


def _compare(old: S, new: S, fields: Sequence[FieldSpec[S]], require_same_entity: bool):
    if require_same_entity and old.entity_id != new.entity_id:
        raise InvalidComparisonError(
            f"Cannot compare versions of different entities ({old.entity_id} vs {new.entity_id})"
        )
    return RedlineResult(
        old_version=old.version,
        new_version=new.version,
        changes=diff_fields(old, new, fields),
    )


def compare_requirements(
    old: RequirementVersion,
    new: RequirementVersion,
    *,
    require_same_entity: bool = False,
) -> RedlineResult:
    """Redline two requirement versions: Title, Description, Type, Status, ParentId."""
    return _compare(old, new, REQUIREMENT_FIELDS, require_same_entity)


def compare_test_cases(
    old: TestCaseVersion,
    new: TestCaseVersion,
    *,
    require_same_entity: bool = False,
) -> RedlineResult:
    """Redline two test case versions: Title, Description, Steps, ExpectedResult."""
    return _compare(old, new, TEST_CASE_FIELDS, require_same_entity)
