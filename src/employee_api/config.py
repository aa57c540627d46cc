"""Application settings, read from the environment and an optional .env file."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

POSTGRES_SCHEMES = ("postgresql://", "postgres://", "postgresql+asyncpg://")

# Hosts on a private container network that may connect without TLS
LOCAL_DATABASE_HOSTS = ("@postgres:", "@localhost:", "@127.0.0.1:")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Employee API settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Employee Management API"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # No default: the URL carries credentials
    database_url: PostgresDsn = Field(description="PostgreSQL connection URL")
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )
    trusted_proxies: str = Field(
        default="",
        description="Comma-separated proxy IPs or CIDR ranges allowed to set X-Forwarded-For",
    )

    # Requests per minute per client IP
    rate_limit_default: int = Field(default=100, ge=1)
    rate_limit_write: int = Field(default=30, ge=1)

    @model_validator(mode="after")
    def check_production_safety(self) -> "Settings":
        """Reject configurations that are unsafe or unsupported."""
        url = str(self.database_url)
        if not url.startswith(POSTGRES_SCHEMES):
            raise ValueError("DATABASE_URL must point to PostgreSQL (postgresql:// or postgres://)")

        if self.environment != "production":
            return self

        if self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production; "
                "it exposes API docs and raw error details."
            )
        if "sslmode=" not in url and not any(host in url for host in LOCAL_DATABASE_HOSTS):
            raise ValueError(
                "DATABASE_URL must set sslmode in production (e.g. sslmode=require)"
            )
        return self

    @property
    def async_database_url(self) -> str:
        """Database URL for SQLAlchemy's asyncpg dialect.

        asyncpg takes ``ssl`` where libpq takes ``sslmode``.
        """
        url = str(self.database_url)
        for scheme in ("postgres://", "postgresql://"):
            if url.startswith(scheme):
                url = "postgresql+asyncpg://" + url[len(scheme):]
                break
        return url.replace("sslmode=", "ssl=")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @property
    def cors_origins_list(self) -> list[str]:
        return _split_csv(self.cors_origins)

    @property
    def trusted_proxies_list(self) -> list[str]:
        return _split_csv(self.trusted_proxies)


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
