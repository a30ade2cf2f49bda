from contextlib import asynccontextmanager

import pytest
import structlog

from healthcheck.core.config import get_settings

SETTINGS_ENV = (
    "HOST", "PORT",
    "DB_HOST", "DB_PORT", "DB_USERNAME", "DB_PASSWORD", "DB_NAME",
    "DB_POOL_MAX_SIZE", "DB_CHECK_TIMEOUT", "ENVIRONMENT",
)


@pytest.fixture
def anyio_backend():
    # psycopg's async API needs asyncio
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


class FakeCursor:
    async def fetchone(self):
        return (1,)


class FakeConnection:
    def __init__(self):
        self.queries = []

    async def execute(self, query):
        self.queries.append(query)
        return FakeCursor()


class FakePool:
    """Stands in for AsyncConnectionPool; fails every checkout with `error` if given."""

    name = "fake-pool"

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.checkouts = 0
        self.timeouts = []
        self.connections = []

    def get_stats(self) -> dict[str, int]:
        return {"requests_num": self.checkouts}

    @asynccontextmanager
    async def connection(self, timeout: float | None = None):
        self.checkouts += 1
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        conn = FakeConnection()
        self.connections.append(conn)
        yield conn


@pytest.fixture
def fake_pool():
    return FakePool()
