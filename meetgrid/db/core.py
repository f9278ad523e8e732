"""PostgreSQL pool for the event store."""

import logging
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from meetgrid.config import get_settings

_logger = logging.getLogger(__name__)

_pool: AsyncConnectionPool | None = None


async def init_pool() -> None:
    """Open the shared pool and migrate the event tables to the latest version."""
    global _pool
    if _pool is not None:
        return
    pg = get_settings().postgres
    _pool = AsyncConnectionPool(
        pg.get_dsn(),
        name="meetgrid-events",
        min_size=pg.pool_min_size,
        max_size=pg.pool_max_size,
        timeout=pg.pool_timeout,
        max_idle=pg.pool_max_idle,
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
    await _pool.open()
    _logger.info(
        "Event store pool open host=%s db=%s size=%d-%d",
        pg.host, pg.database, pg.pool_min_size, pg.pool_max_size,
    )

    from meetgrid.db.migrations import get_current_version, run_migrations

    applied = await run_migrations()
    _logger.info("Event store schema at version %d (%d applied)", await get_current_version(), applied)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    await _pool.close()
    _pool = None
    _logger.info("Event store pool closed")


@asynccontextmanager
async def _get_connection(autocommit: bool = True):
    # Without a pool (scripts, one-off migrations) open a direct connection.
    if _pool is None:
        async with await psycopg.AsyncConnection.connect(
            get_settings().postgres.get_dsn(), autocommit=autocommit
        ) as conn:
            yield conn
        return
    async with _pool.connection() as conn:
        await conn.set_autocommit(autocommit)
        yield conn


def get_pool_stats() -> dict[str, object]:
    if _pool is None:
        return {"status": "not_initialized"}
    stats = _pool.get_stats()
    return {
        "status": "active",
        "size": stats["pool_size"],
        "available": stats["pool_available"],
        "waiting": stats["requests_waiting"],
    }
