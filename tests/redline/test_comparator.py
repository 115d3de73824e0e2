"""Tests for the redline comparator."""

from itertools import product

import pytest

from rqmt_redline.errors import InvalidComparisonError
from rqmt_redline.models.enums import RequirementStatus, RequirementType
from rqmt_redline.models.redline import ChangeType, FieldChange
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion
from rqmt_redline.redline.comparator import (
    REQUIREMENT_FIELDS,
    TEST_CASE_FIELDS,
    classify,
    compare_requirements,
    compare_test_cases,
    to_comparable,
)


def _req(version: int = 1, **overrides) -> RequirementVersion:
    fields = {
        "requirement_id": 1,
        "version": version,
        "title": "Login",
        "description": None,
        "type": RequirementType.CRS,
        "status": RequirementStatus.DRAFT,
        "parent_id": None,
    }
    fields.update(overrides)
    return RequirementVersion(**fields)


def _tc(version: int = 1, **overrides) -> TestCaseVersion:
    fields = {
        "test_case_id": 1,
        "version": version,
        "title": "Login works",
        "description": "Happy path",
        "steps": "Step1;Step2",
        "expected_result": "Dashboard shown",
    }
    fields.update(overrides)
    return TestCaseVersion(**fields)


def test_description_added():
    result = compare_requirements(_req(1), _req(2, description="Add SSO"))
    assert result.old_version == 1
    assert result.new_version == 2
    assert result.changes == [
        FieldChange(
            field="Description", old_value=None, new_value="Add SSO", change_type=ChangeType.ADDED
        )
    ]


def test_status_modified_uses_enum_name():
    result = compare_requirements(
        _req(2, status=RequirementStatus.DRAFT), _req(3, status=RequirementStatus.APPROVED)
    )
    assert result.changes == [
        FieldChange(
            field="Status", old_value="Draft", new_value="Approved", change_type=ChangeType.MODIFIED
        )
    ]


def test_identical_test_case_steps_no_changes():
    result = compare_test_cases(_tc(1), _tc(2))
    assert result.changes == []
    assert (result.old_version, result.new_version) == (1, 2)


def test_parent_removed_rendered_as_string():
    result = compare_requirements(_req(1, parent_id=5), _req(2, parent_id=None))
    assert result.changes == [
        FieldChange(field="ParentId", old_value="5", new_value=None, change_type=ChangeType.REMOVED)
    ]


def test_identical_snapshots_same_version():
    result = compare_test_cases(_tc(4), _tc(4))
    assert result.changes == []
    assert result.old_version == result.new_version == 4


def test_type_change():
    result = compare_requirements(
        _req(1, type=RequirementType.CRS), _req(2, type=RequirementType.USER_STORY)
    )
    assert [(c.field, c.old_value, c.new_value) for c in result.changes] == [
        ("Type", "CRS", "UserStory")
    ]


def test_all_test_case_fields_in_order():
    old = _tc(1, title="A", description="desc", steps="step1", expected_result="pass")
    new = _tc(2, title="B", description="desc2", steps="step2", expected_result="fail")
    result = compare_test_cases(old, new)
    assert [c.field for c in result.changes] == ["Title", "Description", "Steps", "ExpectedResult"]
    assert all(c.change_type is ChangeType.MODIFIED for c in result.changes)


def test_all_requirement_fields_in_order():
    old = _req(1, title="A", description="d", type=RequirementType.CRS, parent_id=None)
    new = _req(
        2,
        title="B",
        description=None,
        type=RequirementType.SRS,
        status=RequirementStatus.VERIFIED,
        parent_id=3,
    )
    result = compare_requirements(old, new)
    assert [(c.field, c.change_type) for c in result.changes] == [
        ("Title", ChangeType.MODIFIED),
        ("Description", ChangeType.REMOVED),
        ("Type", ChangeType.MODIFIED),
        ("Status", ChangeType.MODIFIED),
        ("ParentId", ChangeType.ADDED),
    ]


def test_order_preserved_when_fields_skipped():
    result = compare_requirements(
        _req(1, title="A", parent_id=1), _req(2, title="B", parent_id=2)
    )
    assert [c.field for c in result.changes] == ["Title", "ParentId"]


def test_empty_string_is_not_none():
    """Empty string is a present value: None -> "" is Added, "" -> "x" is Modified."""
    added = compare_test_cases(_tc(1, description=None), _tc(2, description=""))
    assert added.changes[0].change_type is ChangeType.ADDED
    modified = compare_test_cases(_tc(1, description=""), _tc(2, description="x"))
    assert modified.changes[0].change_type is ChangeType.MODIFIED


def test_versions_taken_as_passed():
    """Newer-first input is not reordered."""
    result = compare_requirements(_req(5, title="new"), _req(2, title="old"))
    assert (result.old_version, result.new_version) == (5, 2)
    assert result.changes[0].old_value == "new"


def test_inputs_not_mutated():
    old, new = _req(1), _req(2, title="Changed")
    before = (old.model_dump(), new.model_dump())
    compare_requirements(old, new)
    assert (old.model_dump(), new.model_dump()) == before


def test_cross_entity_permitted_by_default():
    result = compare_test_cases(_tc(1, test_case_id=1), _tc(1, test_case_id=2, title="Other"))
    assert [c.field for c in result.changes] == ["Title"]


def test_cross_entity_rejected_when_required():
    with pytest.raises(InvalidComparisonError):
        compare_requirements(
            _req(1, requirement_id=1), _req(2, requirement_id=2), require_same_entity=True
        )


def test_same_entity_guard_passes_for_same_id():
    result = compare_test_cases(_tc(1), _tc(2, title="T2"), require_same_entity=True)
    assert len(result.changes) == 1


def test_to_comparable():
    assert to_comparable(None) is None
    assert to_comparable(RequirementStatus.IMPLEMENTED) == "Implemented"
    assert to_comparable(42) == "42"
    assert to_comparable("") == ""


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        (None, "x", ChangeType.ADDED),
        ("x", None, ChangeType.REMOVED),
        ("x", "y", ChangeType.MODIFIED),
    ],
)
def test_classify(old, new, expected):
    assert classify(old, new) is expected


# -- Properties over a small grid of requirement snapshots --

_DESCRIPTIONS = [None, "", "one"]
_STATUSES = [RequirementStatus.DRAFT, RequirementStatus.APPROVED]
_PARENTS = [None, 5]

_GRID = [
    _req(1, description=d, status=s, parent_id=p)
    for d, s, p in product(_DESCRIPTIONS, _STATUSES, _PARENTS)
]

_PAIRS = list(product(_GRID, repeat=2))


def _differing_fields(a: RequirementVersion, b: RequirementVersion) -> list[str]:
    return [
        name for name, get in REQUIREMENT_FIELDS if to_comparable(get(a)) != to_comparable(get(b))
    ]


def test_self_comparison_is_empty():
    for snap in _GRID:
        assert compare_requirements(snap, snap).changes == []


def test_swap_mirrors_changes():
    """Reversing the inputs swaps values, keeps Modified, and flips Added/Removed."""
    flipped = {
        ChangeType.ADDED: ChangeType.REMOVED,
        ChangeType.REMOVED: ChangeType.ADDED,
        ChangeType.MODIFIED: ChangeType.MODIFIED,
    }
    for a, b in _PAIRS:
        forward = compare_requirements(a, b).changes
        backward = compare_requirements(b, a).changes
        assert [c.field for c in forward] == [c.field for c in backward]
        for f, r in zip(forward, backward, strict=True):
            assert (f.old_value, f.new_value) == (r.new_value, r.old_value)
            assert r.change_type is flipped[f.change_type]


def test_one_change_per_differing_field():
    for a, b in _PAIRS:
        result = compare_requirements(a, b)
        assert [c.field for c in result.changes] == _differing_fields(a, b)


def test_repeatable():
    a, b = _GRID[0], _GRID[-1]
    assert compare_requirements(a, b) == compare_requirements(a, b)


def test_field_lists():
    assert [name for name, _ in REQUIREMENT_FIELDS] == [
        "Title",
        "Description",
        "Type",
        "Status",
        "ParentId",
    ]
    assert [name for name, _ in TEST_CASE_FIELDS] == [
        "Title",
        "Description",
        "Steps",
        "ExpectedResult",
    ]
