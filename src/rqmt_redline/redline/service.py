"""Resolve version IDs to snapshots and redline them."""

import logging
from itertools import pairwise

from rqmt_redline.errors import VersionNotFoundError
from rqmt_redline.models.redline import RedlineResult
from rqmt_redline.redline.comparator import compare_requirements, compare_test_cases
from rqmt_redline.store.version_store import VersionStore

logger = logging.getLogger(__name__)


async def redline_requirement(
    versions: VersionStore,
    old_version_id: int,
    new_version_id: int,
    *,
    require_same_entity: bool = False,
) -> RedlineResult:
    """Compare two stored requirement versions by version ID.

    Raises VersionNotFoundError if either ID is unknown.
    """
    old = await versions.get_requirement_version(old_version_id)
    new = await versions.get_requirement_version(new_version_id)
    missing = [vid for vid, v in ((old_version_id, old), (new_version_id, new)) if v is None]
    if old is None or new is None:
        raise VersionNotFoundError("Requirement", missing)

    logger.debug("Redline requirement versions %d -> %d", old_version_id, new_version_id)
    return compare_requirements(old, new, require_same_entity=require_same_entity)


async def redline_test_case(
    versions: VersionStore,
    old_version_id: int,
    new_version_id: int,
    *,
    require_same_entity: bool = False,
) -> RedlineResult:
    """Compare two stored test case versions by version ID.

    Raises VersionNotFoundError if either ID is unknown.
    """
    old = await versions.get_test_case_version(old_version_id)
    new = await versions.get_test_case_version(new_version_id)
    missing = [vid for vid, v in ((old_version_id, old), (new_version_id, new)) if v is None]
    if old is None or new is None:
        raise VersionNotFoundError("Test case", missing)

    logger.debug("Redline test case versions %d -> %d", old_version_id, new_version_id)
    return compare_test_cases(old, new, require_same_entity=require_same_entity)


async def requirement_history(versions: VersionStore, requirement_id: int) -> list[RedlineResult]:
    """Redline every adjacent pair of a requirement's versions, oldest first."""
    history = await versions.get_requirement_versions(requirement_id)
    return [compare_requirements(old, new) for old, new in pairwise(history)]


async def test_case_history(versions: VersionStore, test_case_id: int) -> list[RedlineResult]:
    """Redline every adjacent pair of a test case's versions, oldest first."""
    history = await versions.get_test_case_versions(test_case_id)
    return [compare_test_cases(old, new) for old, new in pairwise(history)]
