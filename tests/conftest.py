"""Shared test fixtures."""

import pytest_asyncio

from rqmt_redline.db.connection import create_connection
from rqmt_redline.store.requirement_store import RequirementStore
from rqmt_redline.store.test_case_store import TestCaseStore
from rqmt_redline.store.version_store import VersionStore


@pytest_asyncio.fixture
async def db():
    """In-memory database with full schema."""
    conn = await create_connection(":memory:")
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def requirements(db):
    """Requirement store backed by in-memory DB."""
    return RequirementStore(db)


@pytest_asyncio.fixture
async def test_cases(db):
    """Test case store backed by in-memory DB."""
    return TestCaseStore(db)


@pytest_asyncio.fixture
async def versions(db):
    """Version store backed by in-memory DB."""
    return VersionStore(db)
