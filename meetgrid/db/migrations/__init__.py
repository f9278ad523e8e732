"""Versioned SQL migrations for the event store.

Migrations are ``NNN_description.sql`` files in this directory, applied in
version order and recorded in ``schema_migrations``.
"""

import logging
from pathlib import Path
from typing import Any

from meetgrid.db.core import _get_connection

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_CREATE_MIGRATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    description TEXT
);
"""


async def get_current_version() -> int:
    """Get the current migration version from the database."""
    async with _get_connection() as conn:
        await conn.execute(_CREATE_MIGRATIONS_TABLE)
        cur = await conn.execute("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
        row = await cur.fetchone()
        return int(row[0]) if row and row[0] else 0


def list_migrations() -> list[dict[str, Any]]:
    """All migration files, sorted by version."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
        # "001_initial.sql" -> 1
        head, _, rest = path.stem.partition("_")
        try:
            version = int(head)
        except ValueError:
            continue
        migrations.append({"version": version, "description": rest, "path": path})
    return sorted(migrations, key=lambda m: m["version"])


async def apply_migration(version: int, sql: str, description: str = "") -> None:
    async with _get_connection(autocommit=False) as conn:
        async with conn.transaction():
            await conn.execute(sql)
            await conn.execute(
                "INSERT INTO schema_migrations (version, description) VALUES (%s, %s)",
                (version, description),
            )
    logger.info("Applied migration %d: %s", version, description)


async def run_migrations() -> int:
    """Run all pending migrations.

    Returns:
        Number of migrations applied.
    """
    current = await get_current_version()
    applied = 0
    for migration in list_migrations():
        if migration["version"] <= current:
            continue
        await apply_migration(
            migration["version"],
            migration["path"].read_text(),
            migration["description"],
        )
        applied += 1
    if applied:
        logger.info("Applied %d migrations", applied)
    else:
        logger.debug("No pending migrations")
    return applied
