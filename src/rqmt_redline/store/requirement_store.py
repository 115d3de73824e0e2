"""Create and update requirements, appending a version snapshot on every save."""

import logging
from datetime import UTC, datetime

from rqmt_redline.db.backend import Database
from rqmt_redline.db.queries import (
    get_requirement,
    insert_requirement,
    insert_requirement_version,
    update_requirement,
)
from rqmt_redline.errors import RecordNotFoundError
from rqmt_redline.models.entities import Requirement, RequirementUpdate
from rqmt_redline.models.enums import RequirementStatus, RequirementType

logger = logging.getLogger(__name__)


class RequirementStore:
    """CRUD operations for requirements with versioning."""

    def __init__(self, db: Database):
        """Initialize with a database connection."""
        self.db = db

    async def create_requirement(
        self,
        title: str,
        type: RequirementType = RequirementType.CRS,
        status: RequirementStatus = RequirementStatus.DRAFT,
        description: str | None = None,
        parent_id: int | None = None,
        created_by: int = 0,
    ) -> Requirement:
        """Create a new requirement and its version 1 snapshot."""
        async with self.db.write_lock:
            if parent_id is not None and await get_requirement(self.db, parent_id) is None:
                raise RecordNotFoundError(f"Parent requirement {parent_id} not found")

            now = datetime.now(UTC)
            requirement = Requirement(
                title=title,
                description=description,
                type=type,
                status=status,
                parent_id=parent_id,
                version=1,
                created_by=created_by,
                created_at=now,
                updated_at=now,
            )
            try:
                new_id = await insert_requirement(self.db, requirement)
                requirement = requirement.model_copy(update={"id": new_id})
                await insert_requirement_version(self.db, requirement.to_version(created_by, now))
            except Exception:
                await self.db.rollback()
                raise
            await self.db.commit()

        logger.info("Created requirement %d: %s", new_id, title)
        return requirement

    async def update_requirement(
        self,
        requirement_id: int,
        update: RequirementUpdate,
        modified_by: int = 0,
    ) -> Requirement:
        """Apply a partial update and record it as the next version."""
        async with self.db.write_lock:
            existing = await get_requirement(self.db, requirement_id)
            if existing is None:
                raise RecordNotFoundError(f"Requirement {requirement_id} not found")

            changes = update.changes()
            parent_id = changes.get("parent_id")
            if parent_id is not None:
                if parent_id == requirement_id:
                    raise ValueError(f"Requirement {requirement_id} cannot be its own parent")
                if await get_requirement(self.db, parent_id) is None:
                    raise RecordNotFoundError(f"Parent requirement {parent_id} not found")

            now = datetime.now(UTC)
            updated = existing.model_copy(
                update={**changes, "version": existing.version + 1, "updated_at": now}
            )
            try:
                await update_requirement(self.db, updated)
                await insert_requirement_version(self.db, updated.to_version(modified_by, now))
            except Exception:
                await self.db.rollback()
                raise
            await self.db.commit()

        logger.info("Updated requirement %d to v%d", requirement_id, updated.version)
        return updated

    async def get_requirement(self, requirement_id: int) -> Requirement | None:
        """Get a single requirement by ID."""
        return await get_requirement(self.db, requirement_id)
