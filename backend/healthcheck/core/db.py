"""
Postgres connection pool for the service.

The pool is lazy: building it performs no network I/O, and opening it with
min_size=0 starts the pool's maintenance workers without dialing the server.
The first connection() checkout is what actually connects.

Usage:
    pool = build_pool(get_settings().database)
    await open_pool(pool)
    async with pool.connection() as conn:
        await conn.execute("SELECT 1")
"""

from psycopg_pool import AsyncConnectionPool

from healthcheck.core.config import DatabaseConfig
from healthcheck.core.logging import get_logger

log = get_logger(__name__)


def build_pool(config: DatabaseConfig, *, max_size: int = 10) -> AsyncConnectionPool:
    """
    Returns an unopened pool for `config`. Never blocks and never fails on the
    config contents; a bad host or credentials surface on first checkout.
    """
    return AsyncConnectionPool(
        conninfo=config.conninfo,
        min_size=0,
        max_size=max_size,
        open=False,
        name=config.display_name,
        kwargs={"autocommit": True},
    )


async def open_pool(pool: AsyncConnectionPool) -> None:
    await pool.open(wait=False)
    log.info("pool_opened", pool=pool.name, max_size=pool.max_size)


async def close_pool(pool: AsyncConnectionPool) -> None:
    await pool.close()
    log.info("pool_closed", pool=pool.name)
