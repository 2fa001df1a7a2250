"""
Songbook Backend - Configuration and Health Check Tests
========================================================

What:  Tests for Settings validation and the /health endpoint.
"""

import importlib

import pytest
from pydantic import ValidationError as SettingsValidationError

from songbook.config import Settings


class TestSettings:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="chatty")

    def test_store_timeout_must_be_positive(self):
        with pytest.raises(SettingsValidationError):
            Settings(store_timeout_seconds=0)

    def test_cors_origins_split(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_async_driver_passes_production_check(self):
        Settings(database_url="postgresql+asyncpg://u:p@db:5432/songbook").validate_required_for_production()

    def test_sync_driver_fails_production_check(self):
        settings = Settings(database_url="postgresql://u:p@db:5432/songbook")
        with pytest.raises(ValueError, match="not an async driver"):
            settings.validate_required_for_production()

    def test_sqlite_detected(self):
        assert Settings(database_url="sqlite+aiosqlite:///songs.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://db/songbook").is_sqlite


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_store(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"


class TestPackaging:

    @pytest.mark.parametrize("name", ["songbook.models", "songbook.schemas"])
    def test_subpackage_is_regular_package(self, name):
        # Namespace packages have no __file__ and are skipped by packages.find
        module = importlib.import_module(name)
        assert module.__file__ is not None
