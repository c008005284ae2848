"""
Shared configuration for the chatbot service.

EnvSettings fixes how every settings group reads the environment and the
.env file. ServiceSettings carries the service-wide values: deployment
environment, log level, API mount point, CORS origins and the bind address
used when the app is launched directly.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvSettings(BaseSettings):
    """Environment and .env loading rules shared by every settings group."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class ServiceSettings(EnvSettings):
    """Service-wide settings read from unprefixed variables."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    api_prefix: str = Field(
        default="/api/v1",
        description="Path prefix for every router",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API (the chat widget is embedded on customer sites)",
    )
    host: str = Field(default="0.0.0.0", description="Bind address for direct launch")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for direct launch")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
