"""
Relational store settings.

SQLite through aiosqlite is the local default; deployments point
DATABASE_URL at PostgreSQL with the pgvector extension. Plain driver-less
URLs as handed out by hosting providers (postgres://, postgresql://,
sqlite://) are rewritten to their async drivers.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from chatbot_rag.configs.base import EnvSettings

_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class DatabaseSettings(EnvSettings):
    """DATABASE_* variables."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    url: str = Field(
        default="sqlite+aiosqlite:///./chatbot_rag.db",
        description="Async SQLAlchemy URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")
    pool_size: int = Field(default=10, ge=1, description="PostgreSQL pool size")
    max_overflow: int = Field(default=20, ge=0, description="PostgreSQL pool overflow")
    pool_timeout: int = Field(default=30, ge=1, description="Seconds to wait for a pooled connection")

    @field_validator("url")
    @classmethod
    def _use_async_driver(cls, value: str) -> str:
        for prefix, replacement in _ASYNC_DRIVERS.items():
            if value.startswith(prefix):
                return replacement + value[len(prefix):]
        return value

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_postgres(self) -> bool:
        return self.url.startswith("postgresql")

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for create_async_engine; pooling applies to PostgreSQL only."""
        options: dict[str, Any] = {"echo": self.echo_sql}
        if not self.is_sqlite:
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_timeout=self.pool_timeout,
                pool_pre_ping=True,
            )
        return options
