from functools import lru_cache

from psycopg.conninfo import make_conninfo
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class DatabaseConfig(BaseModel):
    """
    Connection parameters for the Postgres pool.

    Field contents are not checked: an empty host or a port nobody listens on
    is accepted here and only fails on the first connection attempt.
    """

    model_config = {"frozen": True}

    host: str = "localhost"
    port: int = Field(default=5432, ge=0, le=65535)
    username: str = "app"
    password: str = "passwd"
    database: str = "app"

    @property
    def conninfo(self) -> str:
        return make_conninfo(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            dbname=self.database,
        )

    @property
    def display_name(self) -> str:
        # no password: this ends up in log lines
        return f"{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    # ── Listener ──────────────────────────────────────────────────────────────
    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)

    # ── Database ──────────────────────────────────────────────────────────────
    db_host: str = "localhost"
    db_port: int = Field(default=5432, ge=0, le=65535)
    db_username: str = "app"
    db_password: str = "passwd"
    db_name: str = "app"

    # ── Pool ──────────────────────────────────────────────────────────────────
    db_pool_max_size: int = 10
    db_check_timeout: float = 5.0         # seconds to wait for a pooled connection

    # ── App ───────────────────────────────────────────────────────────────────
    environment: str = "development"

    model_config = {"env_file": ".env"}

    @property
    def database(self) -> DatabaseConfig:
        return DatabaseConfig(
            host=self.db_host,
            port=self.db_port,
            username=self.db_username,
            password=self.db_password,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
