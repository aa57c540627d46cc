"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from employee_api.config import Settings


class TestSettings:
    def test_async_url_uses_asyncpg_and_ssl(self) -> None:
        settings = Settings(database_url="postgresql://u:p@db.internal:5432/app?sslmode=require")

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db.internal:5432/app?ssl=require"

    def test_debug_rejected_in_production(self) -> None:
        with pytest.raises(ValidationError, match="DEBUG mode cannot be enabled"):
            Settings(
                database_url="postgresql://u:p@localhost:5432/app",
                environment="production",
                debug=True,
            )

    def test_production_requires_sslmode_for_remote_hosts(self) -> None:
        with pytest.raises(ValidationError, match="sslmode"):
            Settings(database_url="postgresql://u:p@db.internal:5432/app", environment="production")

    def test_bcrypt_rounds_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Settings(database_url="postgresql://u:p@localhost:5432/app", bcrypt_rounds=3)

    def test_comma_separated_lists(self) -> None:
        settings = Settings(
            database_url="postgresql://u:p@localhost:5432/app",
            cors_origins="http://a.test, http://b.test,",
            trusted_proxies="10.0.0.1, 10.0.0.0/8",
        )

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
        assert settings.trusted_proxies_list == ["10.0.0.1", "10.0.0.0/8"]
