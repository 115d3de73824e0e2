"""Compact output formatters for MCP tool responses."""

from rqmt_redline.models.entities import Requirement, TestCase
from rqmt_redline.models.redline import ChangeType, RedlineResult
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion

_MARKERS = {
    ChangeType.ADDED: "+",
    ChangeType.REMOVED: "-",
    ChangeType.MODIFIED: "~",
}


def _when(version: RequirementVersion | TestCaseVersion) -> str:
    return version.modified_at.strftime("%Y-%m-%d %H:%M") if version.modified_at else "?"


def format_requirement_version(version: RequirementVersion) -> str:
    """Format: [#7] requirement 3 v2 | Title (Approved, CRS)."""
    header = (
        f"[#{version.id}] requirement {version.requirement_id} v{version.version}"
        f" | {version.title} ({version.status.value}, {version.type.value})"
    )
    lines = [header, f"  by user {version.modified_by} at {_when(version)}"]
    if version.parent_id is not None:
        lines.append(f"  parent: {version.parent_id}")
    if version.description:
        lines.append(f"  {version.description}")
    return "\n".join(lines)


def format_test_case_version(version: TestCaseVersion) -> str:
    """Format: [#4] test_case 2 v1 | Title, then steps and expected result."""
    header = f"[#{version.id}] test_case {version.test_case_id} v{version.version} | {version.title}"
    lines = [header, f"  by user {version.modified_by} at {_when(version)}"]
    if version.description:
        lines.append(f"  {version.description}")
    if version.steps:
        lines.append("  Steps:")
        lines.extend(f"    {line}" for line in version.steps.splitlines())
    if version.expected_result:
        lines.append(f"  Expected: {version.expected_result}")
    return "\n".join(lines)


def format_requirement(requirement: Requirement) -> str:
    """One-liner for a saved requirement."""
    return (
        f"requirement {requirement.id} (v{requirement.version}) | {requirement.title}"
        f" ({requirement.status.value}, {requirement.type.value})"
    )


def format_test_case(test_case: TestCase) -> str:
    """One-liner for a saved test case."""
    return f"test_case {test_case.id} (v{test_case.version}) | {test_case.title}"


def format_redline_text(result: RedlineResult) -> str:
    """Human-readable redline, one marked line per changed field.

    ``+`` added, ``-`` removed, ``~`` modified.
    """
    header = f"Redline v{result.old_version} -> v{result.new_version}"
    if not result.changes:
        return f"{header}: no changes"

    lines = [f"{header}: {len(result.changes)} change(s)"]
    for change in result.changes:
        marker = _MARKERS[change.change_type]
        if change.change_type == ChangeType.ADDED:
            detail = _quote(change.new_value)
        elif change.change_type == ChangeType.REMOVED:
            detail = _quote(change.old_value)
        else:
            detail = f"{_quote(change.old_value)} -> {_quote(change.new_value)}"
        lines.append(f"  {marker} {change.field}: {detail}")
    return "\n".join(lines)


def _quote(value: str | None) -> str:
    if value is None:
        return "(none)"
    if "\n" in value:
        return '"' + value.replace("\n", "\\n") + '"'
    return value


def format_result_list(
    formatted_entries: list[str],
    header: str | None = None,
    note: str | None = None,
) -> str:
    """Count + note + entries joined by blank lines."""
    if not formatted_entries:
        return "No results found."

    lines: list[str] = []
    if header:
        lines.append(header)
    lines.append(f"{len(formatted_entries)} result(s)")
    if note:
        lines.append(f"Note: {note}")
    lines.append("")
    lines.append("\n\n".join(formatted_entries))
    return "\n".join(lines)
