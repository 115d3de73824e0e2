"""Query helpers for requirements, test cases and their versions."""

from datetime import UTC, datetime

from rqmt_redline.db.backend import Database, Row
from rqmt_redline.models.entities import Requirement, TestCase
from rqmt_redline.models.enums import RequirementStatus, RequirementType
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion


def _parse_dt(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


def _iso(value: datetime | None) -> str:
    return (value or datetime.now(UTC)).isoformat()


# -- Requirements --


def row_to_requirement(row: Row) -> Requirement:
    """Convert a database row to a Requirement."""
    return Requirement(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        type=RequirementType(row["type"]),
        status=RequirementStatus(row["status"]),
        parent_id=row["parent_id"],
        version=row["version"],
        created_by=row["created_by"],
        created_at=_parse_dt(row["created_at"]),
        updated_at=_parse_dt(row["updated_at"]),
    )


def row_to_requirement_version(row: Row) -> RequirementVersion:
    """Convert a database row to a RequirementVersion."""
    return RequirementVersion(
        id=row["id"],
        requirement_id=row["requirement_id"],
        version=row["version"],
        title=row["title"],
        description=row["description"],
        type=RequirementType(row["type"]),
        status=RequirementStatus(row["status"]),
        parent_id=row["parent_id"],
        modified_by=row["modified_by"],
        modified_at=_parse_dt(row["modified_at"]),
    )


async def insert_requirement(db: Database, requirement: Requirement) -> int:
    """Insert a requirement and return its generated ID. Does not commit."""
    cursor = await db.execute(
        """INSERT INTO requirements
        (title, description, type, status, parent_id, version, created_by,
         created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            requirement.title,
            requirement.description,
            requirement.type.value,
            requirement.status.value,
            requirement.parent_id,
            requirement.version,
            requirement.created_by,
            _iso(requirement.created_at),
            requirement.updated_at.isoformat() if requirement.updated_at else None,
        ),
    )
    if cursor.lastrowid is None:
        raise RuntimeError("INSERT into requirements returned no row ID")
    return cursor.lastrowid


async def update_requirement(db: Database, requirement: Requirement) -> None:
    """Overwrite a requirement's current state. Does not commit."""
    await db.execute(
        """UPDATE requirements SET
        title=?, description=?, type=?, status=?, parent_id=?, version=?, updated_at=?
        WHERE id=?""",
        (
            requirement.title,
            requirement.description,
            requirement.type.value,
            requirement.status.value,
            requirement.parent_id,
            requirement.version,
            _iso(requirement.updated_at),
            requirement.id,
        ),
    )


async def get_requirement(db: Database, requirement_id: int) -> Requirement | None:
    """Get a single requirement by ID."""
    cursor = await db.execute("SELECT * FROM requirements WHERE id = ?", (requirement_id,))
    row = await cursor.fetchone()
    return row_to_requirement(row) if row else None


async def insert_requirement_version(db: Database, version: RequirementVersion) -> int:
    """Append a requirement snapshot and return its version ID. Does not commit."""
    cursor = await db.execute(
        """INSERT INTO requirement_versions
        (requirement_id, version, title, description, type, status, parent_id,
         modified_by, modified_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            version.requirement_id,
            version.version,
            version.title,
            version.description,
            version.type.value,
            version.status.value,
            version.parent_id,
            version.modified_by,
            _iso(version.modified_at),
        ),
    )
    if cursor.lastrowid is None:
        raise RuntimeError("INSERT into requirement_versions returned no row ID")
    return cursor.lastrowid


# -- Test cases --


def row_to_test_case(row: Row) -> TestCase:
    """Convert a database row to a TestCase."""
    return TestCase(
        id=row["id"],
        suite_id=row["suite_id"],
        title=row["title"],
        description=row["description"],
        steps=row["steps"],
        expected_result=row["expected_result"],
        version=row["version"],
        created_by=row["created_by"],
        created_at=_parse_dt(row["created_at"]),
        updated_at=_parse_dt(row["updated_at"]),
    )


def row_to_test_case_version(row: Row) -> TestCaseVersion:
    """Convert a database row to a TestCaseVersion."""
    return TestCaseVersion(
        id=row["id"],
        test_case_id=row["test_case_id"],
        version=row["version"],
        title=row["title"],
        description=row["description"],
        steps=row["steps"],
        expected_result=row["expected_result"],
        modified_by=row["modified_by"],
        modified_at=_parse_dt(row["modified_at"]),
    )


async def insert_test_case(db: Database, test_case: TestCase) -> int:
    """Insert a test case and return its generated ID. Does not commit."""
    cursor = await db.execute(
        """INSERT INTO test_cases
        (suite_id, title, description, steps, expected_result, version, created_by,
         created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            test_case.suite_id,
            test_case.title,
            test_case.description,
            test_case.steps,
            test_case.expected_result,
            test_case.version,
            test_case.created_by,
            _iso(test_case.created_at),
            test_case.updated_at.isoformat() if test_case.updated_at else None,
        ),
    )
    if cursor.lastrowid is None:
        raise RuntimeError("INSERT into test_cases returned no row ID")
    return cursor.lastrowid


async def update_test_case(db: Database, test_case: TestCase) -> None:
    """Overwrite a test case's current state. Does not commit."""
    await db.execute(
        """UPDATE test_cases SET
        suite_id=?, title=?, description=?, steps=?, expected_result=?, version=?,
        updated_at=?
        WHERE id=?""",
        (
            test_case.suite_id,
            test_case.title,
            test_case.description,
            test_case.steps,
            test_case.expected_result,
            test_case.version,
            _iso(test_case.updated_at),
            test_case.id,
        ),
    )


async def get_test_case(db: Database, test_case_id: int) -> TestCase | None:
    """Get a single test case by ID."""
    cursor = await db.execute("SELECT * FROM test_cases WHERE id = ?", (test_case_id,))
    row = await cursor.fetchone()
    return row_to_test_case(row) if row else None


async def insert_test_case_version(db: Database, version: TestCaseVersion) -> int:
    """Append a test case snapshot and return its version ID. Does not commit."""
    cursor = await db.execute(
        """INSERT INTO test_case_versions
        (test_case_id, version, title, description, steps, expected_result,
         modified_by, modified_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (
            version.test_case_id,
            version.version,
            version.title,
            version.description,
            version.steps,
            version.expected_result,
            version.modified_by,
            _iso(version.modified_at),
        ),
    )
    if cursor.lastrowid is None:
        raise RuntimeError("INSERT into test_case_versions returned no row ID")
    return cursor.lastrowid
