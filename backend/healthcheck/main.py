from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from psycopg_pool import AsyncConnectionPool

load_dotenv()

# Must come after load_dotenv so env vars are available
from healthcheck.api import health                                  # noqa: E402
from healthcheck.core.config import Settings, get_settings          # noqa: E402
from healthcheck.core.db import build_pool, close_pool, open_pool  # noqa: E402
from healthcheck.core.logging import configure_logging, get_logger  # noqa: E402

log = get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    pool: AsyncConnectionPool = app.state.pool
    await open_pool(pool)
    log.info("startup", version=VERSION, environment=app.state.settings.environment)
    yield
    await close_pool(pool)
    log.info("shutdown")


def create_app(
    settings: Settings | None = None,
    pool: AsyncConnectionPool | None = None,
) -> FastAPI:
    """
    Build the application with its pool attached as shared state.
    Handlers reach the pool through request.app.state, never a global.
    """
    settings = settings or get_settings()
    if pool is None:
        pool = build_pool(settings.database, max_size=settings.db_pool_max_size)

    app = FastAPI(
        title="Health Check Service",
        description="Liveness and database readiness probes",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pool = pool
    app.include_router(health.router)
    return app


def run() -> None:
    """Serve on the configured loopback address until the process is killed."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    # not bound yet; uvicorn reports the bind and exits if it fails
    log.info("starting", address=f"{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
