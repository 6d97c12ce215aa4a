# =============================================================================
# Application Configuration: Pydantic Settings
# =============================================================================
#
# Settings load in this priority order (highest first):
#   1. Environment variables (FIBCALC_* or the deployment names below)
#   2. Values from the .env file
#   3. Default values defined below
#
# The API and the worker were historically deployed with the plain PG*/REDIS_*
# variables, so those names are accepted as aliases. A full DATABASE_URL or
# REDIS_URL, when given, takes precedence over the individual parts.
#
# USAGE:
#   from fibcalc.config import get_settings
#   settings = get_settings()
# =============================================================================

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Settings shared by the API and the worker process.

    Redis defaults match the deployed stack (host "redis", TLS on); set
    REDIS_HOST=localhost and REDIS_TLS=false for a local plain-text Redis.
    Override via environment variables or a .env file in the working
    directory.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "Fibonacci Calculator"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("FIBCALC_ENVIRONMENT", "NODE_ENV"),
    )

    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("FIBCALC_HOST", "HOST"))
    port: int = Field(default=8080, validation_alias=AliasChoices("FIBCALC_PORT", "PORT"))

    # -------------------------------------------------------------------------
    # Durable Store: PostgreSQL (async driver)
    # -------------------------------------------------------------------------
    database_url: str | None = None
    pg_host: str = Field(default="localhost", validation_alias=AliasChoices("FIBCALC_PG_HOST", "PGHOST"))
    pg_port: int = Field(default=5432, validation_alias=AliasChoices("FIBCALC_PG_PORT", "PGPORT"))
    pg_database: str = Field(
        default="fibcalc",
        validation_alias=AliasChoices("FIBCALC_PG_DATABASE", "PGDATABASE"),
    )
    pg_user: str = Field(default="postgres", validation_alias=AliasChoices("FIBCALC_PG_USER", "PGUSER"))
    pg_password: str = Field(
        default="postgres",
        validation_alias=AliasChoices("FIBCALC_PG_PASSWORD", "PGPASSWORD"),
    )
    # "disable" / "require" force the mode (any case); anything else means
    # "require in production"
    pg_ssl: Literal["disable", "require"] | None = Field(
        default=None,
        validation_alias=AliasChoices("FIBCALC_PG_SSL", "PGSSL"),
    )
    pool_size: int = 5
    max_overflow: int = 10

    # -------------------------------------------------------------------------
    # Fast-Path Cache + Notification Channel: Redis
    # -------------------------------------------------------------------------
    redis_url: str | None = None
    redis_host: str = Field(default="redis", validation_alias=AliasChoices("FIBCALC_REDIS_HOST", "REDIS_HOST"))
    redis_port: int = Field(default=6379, validation_alias=AliasChoices("FIBCALC_REDIS_PORT", "REDIS_PORT"))
    redis_tls: bool = Field(default=True, validation_alias=AliasChoices("FIBCALC_REDIS_TLS", "REDIS_TLS"))

    values_key: str = "values"
    insert_channel: str = "insert"
    placeholder: str = "Nothing yet!"

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------
    max_index: int = 40
    calculator: Literal["recursive", "iterative"] = "recursive"

    # -------------------------------------------------------------------------
    # Startup probes: bounded retry, then the process aborts
    # -------------------------------------------------------------------------
    startup_max_retries: int = 5
    postgres_retry_delay: float = 2.0
    redis_retry_delay: float = 1.0

    model_config = SettingsConfigDict(
        env_prefix="FIBCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("pg_ssl", mode="before")
    @classmethod
    def _normalise_pg_ssl(cls, value: object) -> str | None:
        if value is None:
            return None
        mode = str(value).strip().lower()
        return mode if mode in ("disable", "require") else None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def resolved_database_url(self) -> str:
        """Return DATABASE_URL, or assemble an asyncpg URL from the PG* parts."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.pg_user,
            password=self.pg_password,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_database,
        )
        return url.render_as_string(hide_password=False)

    def database_connect_args(self) -> dict:
        """asyncpg ``connect_args`` for the configured SSL mode."""
        if self.pg_ssl == "disable":
            return {"ssl": False}
        if self.pg_ssl == "require" or self.is_production:
            # Encrypted, server certificate not verified
            return {"ssl": "require"}
        return {"ssl": False}

    def resolved_redis_url(self) -> str:
        if self.redis_url:
            return self.redis_url
        scheme = "rediss" if self.redis_tls else "redis"
        return f"{scheme}://{self.redis_host}:{self.redis_port}/0"


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache a Settings instance.

    In tests, construct ``Settings(...)`` directly and pass it to
    ``create_app`` instead of going through the cache.
    """
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Route all process logs to stdout. Called once per entry point."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
