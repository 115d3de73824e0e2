"""Version history operations."""

from rqmt_redline.db.backend import Database
from rqmt_redline.db.queries import row_to_requirement_version, row_to_test_case_version
from rqmt_redline.models.version import RequirementVersion, TestCaseVersion


class VersionStore:
    """Read access to requirement and test case version history."""

    def __init__(self, db: Database):
        """Initialize with a database connection."""
        self.db = db

    async def get_requirement_versions(self, requirement_id: int) -> list[RequirementVersion]:
        """Get all versions of a requirement, ordered by version number."""
        cursor = await self.db.execute(
            "SELECT * FROM requirement_versions WHERE requirement_id = ? ORDER BY version",
            (requirement_id,),
        )
        return [row_to_requirement_version(row) for row in await cursor.fetchall()]

    async def get_requirement_version(self, version_id: int) -> RequirementVersion | None:
        """Get a single requirement version by its version ID."""
        cursor = await self.db.execute(
            "SELECT * FROM requirement_versions WHERE id = ?", (version_id,)
        )
        row = await cursor.fetchone()
        return row_to_requirement_version(row) if row else None

    async def get_latest_requirement_version(
        self, requirement_id: int
    ) -> RequirementVersion | None:
        """Get the highest-numbered version of a requirement."""
        cursor = await self.db.execute(
            """SELECT * FROM requirement_versions WHERE requirement_id = ?
            ORDER BY version DESC LIMIT 1""",
            (requirement_id,),
        )
        row = await cursor.fetchone()
        return row_to_requirement_version(row) if row else None

    async def get_test_case_versions(self, test_case_id: int) -> list[TestCaseVersion]:
        """Get all versions of a test case, ordered by version number."""
        cursor = await self.db.execute(
            "SELECT * FROM test_case_versions WHERE test_case_id = ? ORDER BY version",
            (test_case_id,),
        )
        return [row_to_test_case_version(row) for row in await cursor.fetchall()]

    async def get_test_case_version(self, version_id: int) -> TestCaseVersion | None:
        """Get a single test case version by its version ID."""
        cursor = await self.db.execute("SELECT * FROM test_case_versions WHERE id = ?", (version_id,))
        row = await cursor.fetchone()
        return row_to_test_case_version(row) if row else None

    async def get_latest_test_case_version(self, test_case_id: int) -> TestCaseVersion | None:
        """Get the highest-numbered version of a test case."""
        cursor = await self.db.execute(
            """SELECT * FROM test_case_versions WHERE test_case_id = ?
            ORDER BY version DESC LIMIT 1""",
            (test_case_id,),
        )
        row = await cursor.fetchone()
        return row_to_test_case_version(row) if row else None
