"""Tests for centralized configuration."""

import os
from unittest.mock import patch


class TestPostgresSettings:
    def test_postgres_default_values(self):
        from meetgrid.config import PostgresSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = PostgresSettings()
            assert settings.host == "postgres"
            assert settings.port == 5432
            assert settings.database == "devdb"
            assert settings.pool_max_size == 10

    def test_postgres_dsn_generation(self):
        from meetgrid.config import PostgresSettings

        env = {
            "POSTGRES_HOST": "dbhost",
            "POSTGRES_PORT": "5433",
            "POSTGRES_USER": "myuser",
            "POSTGRES_PASSWORD": "mypass",
            "POSTGRES_DB": "mydb",
        }
        with patch.dict(os.environ, env, clear=True):
            dsn = PostgresSettings().get_dsn()
            assert "host=dbhost" in dsn
            assert "port=5433" in dsn
            assert "user=myuser" in dsn
            assert "password=mypass" in dsn
            assert "dbname=mydb" in dsn


class TestRedisSettings:
    def test_redis_from_environment(self):
        from meetgrid.config import RedisSettings

        env = {"REDIS_HOST": "cache", "REDIS_PORT": "6380", "REDIS_POOL_TIMEOUT_SEC": "10"}
        with patch.dict(os.environ, env, clear=True):
            settings = RedisSettings()
            assert settings.host == "cache"
            assert settings.port == 6380
            assert settings.pool_timeout_sec == 10.0


class TestCorsSettings:
    def test_cors_wildcard_disables_credentials(self):
        from meetgrid.config import CorsSettings

        with patch.dict(os.environ, {"CORS_ORIGINS": "*"}, clear=True):
            settings = CorsSettings()
            assert settings.origins == ["*"]
            assert settings.allow_credentials is False

    def test_cors_origin_list(self):
        from meetgrid.config import CorsSettings

        env = {"CORS_ORIGINS": "http://a.test, http://b.test"}
        with patch.dict(os.environ, env, clear=True):
            settings = CorsSettings()
            assert settings.origins == ["http://a.test", "http://b.test"]
            assert settings.allow_credentials is True


class TestSchedulingSettings:
    def test_defaults(self):
        from meetgrid.config import SchedulingSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = SchedulingSettings()
            assert settings.max_name_length == 250
            assert settings.calendar_duration_minutes == 60
            assert settings.event_id_length == 10

    def test_from_environment(self):
        from meetgrid.config import SchedulingSettings

        env = {"W2M_MAX_NAME_LENGTH": "40", "W2M_CALENDAR_DURATION_MINUTES": "30"}
        with patch.dict(os.environ, env, clear=True):
            settings = SchedulingSettings()
            assert settings.max_name_length == 40
            assert settings.calendar_duration_minutes == 30


class TestSettings:
    def test_settings_singleton_pattern(self):
        from meetgrid.config import get_settings

        assert get_settings() is get_settings()

    def test_clear_settings_cache(self):
        from meetgrid.config import clear_settings_cache, get_settings

        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first

    def test_flags(self):
        from meetgrid.config import Settings

        env = {"REQUEST_DEBUG": "1", "ENABLE_DB": "0", "ENABLE_EVENT_BUS": "no"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()
            assert settings.debug.request is True
            assert settings.features.db is False
            assert settings.features.event_bus is False

    def test_flag_defaults(self):
        from meetgrid.config import Settings

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            assert settings.debug.request is False
            assert settings.features.db is True
            assert settings.features.event_bus is True
