import psycopg
from fastapi import APIRouter, Depends, Request, Response, status
from psycopg_pool import AsyncConnectionPool

from healthcheck.core.config import Settings
from healthcheck.core.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["health"])


def get_pool(request: Request) -> AsyncConnectionPool:
    """The shared pool attached to the application by create_app()."""
    return request.app.state.pool


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/health")
async def health() -> Response:
    """Liveness probe. Answers 200 as long as the process is serving."""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/health/db")
async def health_db(
    pool: AsyncConnectionPool = Depends(get_pool),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Readiness probe. Runs `SELECT 1` through the pool, once, no retries.
    Any database error becomes a bare 500; the detail stays in the server log.
    """
    log.debug("db_health_check", pool=pool.name, stats=pool.get_stats())
    try:
        async with pool.connection(timeout=settings.db_check_timeout) as conn:
            cur = await conn.execute("SELECT 1")
            await cur.fetchone()
    except psycopg.Error as exc:
        log.warning(
            "db_health_check_failed",
            pool=pool.name,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_200_OK)
