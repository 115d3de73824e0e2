"""DDL for the requirement and test case version store."""

from rqmt_redline.db.backend import Database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS requirements (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    type TEXT NOT NULL,
    status TEXT NOT NULL,
    parent_id INTEGER REFERENCES requirements(id),
    version INTEGER NOT NULL DEFAULT 1,
    created_by INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_requirements_parent ON requirements(parent_id);

CREATE TABLE IF NOT EXISTS requirement_versions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    requirement_id INTEGER NOT NULL REFERENCES requirements(id),
    version INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    type TEXT NOT NULL,
    status TEXT NOT NULL,
    parent_id INTEGER,
    modified_by INTEGER NOT NULL DEFAULT 0,
    modified_at TEXT NOT NULL,
    UNIQUE(requirement_id, version)
);

CREATE TABLE IF NOT EXISTS test_cases (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    suite_id INTEGER,
    title TEXT NOT NULL,
    description TEXT,
    steps TEXT,
    expected_result TEXT,
    version INTEGER NOT NULL DEFAULT 1,
    created_by INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE TABLE IF NOT EXISTS test_case_versions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    test_case_id INTEGER NOT NULL REFERENCES test_cases(id),
    version INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    steps TEXT,
    expected_result TEXT,
    modified_by INTEGER NOT NULL DEFAULT 0,
    modified_at TEXT NOT NULL,
    UNIQUE(test_case_id, version)
);

-- Snapshots are append-only
CREATE TRIGGER IF NOT EXISTS requirement_versions_no_update
BEFORE UPDATE ON requirement_versions
BEGIN
    SELECT RAISE(ABORT, 'requirement versions are immutable');
END;

CREATE TRIGGER IF NOT EXISTS test_case_versions_no_update
BEFORE UPDATE ON test_case_versions
BEGIN
    SELECT RAISE(ABORT, 'test case versions are immutable');
END;
"""


async def apply_schema(db: Database) -> None:
    """Apply the database schema."""
    await db.executescript(SCHEMA_SQL)

    cursor = await db.execute("SELECT version FROM schema_version")
    row = await cursor.fetchone()
    if row is None:
        await db.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))

    await db.commit()
