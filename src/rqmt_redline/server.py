"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from rqmt_redline.config import get_db_path, get_log_level, is_strict_redline
from rqmt_redline.db.connection import create_connection
from rqmt_redline.store.requirement_store import RequirementStore
from rqmt_redline.store.test_case_store import TestCaseStore
from rqmt_redline.store.version_store import VersionStore
from rqmt_redline.tools.rm_redline import register_rm_redline
from rqmt_redline.tools.rm_store import register_rm_store
from rqmt_redline.tools.rm_versions import register_rm_versions


def configure_logging() -> None:
    """Log to stderr; stdout is the MCP stdio transport."""
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage the database connection and the stores built on it."""
    configure_logging()
    logger = logging.getLogger(__name__)

    db_path = get_db_path()
    logger.info("Opening database at %s", db_path)
    db = await create_connection(db_path)

    if is_strict_redline():
        logger.info("Strict redline: cross-entity comparisons are rejected")

    try:
        yield {
            "db": db,
            "requirements": RequirementStore(db),
            "test_cases": TestCaseStore(db),
            "versions": VersionStore(db),
        }
    finally:
        await db.close()
        logger.info("Database connection closed")


_INSTRUCTIONS = """\
Version history for requirements and test cases.

SAVING — every save creates a numbered, immutable version:
- rm_store_requirement: create a requirement, or update one with \
update_requirement_id. Only the fields you pass change; use clear_fields \
to empty description or parent_id.
- rm_store_test_case: same for test cases. Steps may be text or a list of \
{description, expected_result}.

HISTORY:
- rm_versions: list all versions of an entity (entity_id) or fetch one \
(version_id). Lines start with [#<version_id>].

REDLINE:
- rm_redline: compare two version IDs field by field. Each change is Added \
(field was empty), Removed (field is now empty) or Modified. Use \
history=true with entity_id to redline every consecutive pair.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "rqmt-redline",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_rm_store(mcp)
    register_rm_versions(mcp)
    register_rm_redline(mcp)

    return mcp
