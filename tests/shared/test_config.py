"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
from datetime import timedelta
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()
        assert settings.app_name == "Userhub API"
        assert settings.debug is False
        assert settings.api_port == 8090
        assert settings.web_port == 8080
        assert settings.domain == "example.com"
        assert settings.jwt_algorithm == "HS256"
        assert settings.user_store == "postgres"

    def test_token_lifetimes(self):
        settings = Settings()
        assert settings.access_token_expiry == timedelta(minutes=15)
        assert settings.refresh_token_expiry == timedelta(hours=24)
        assert settings.refresh_grace == timedelta(hours=12)

    def test_loads_from_env(self):
        """Settings should load USERHUB_-prefixed environment variables."""
        with patch.dict(os.environ, {
            "USERHUB_DEBUG": "true",
            "USERHUB_API_PORT": "9000",
            "USERHUB_DOMAIN": "users.example.org",
            "USERHUB_REFRESH_TOKEN_EXPIRY_HOURS": "48",
        }):
            settings = Settings()
            assert settings.debug is True
            assert settings.api_port == 9000
            assert settings.domain == "users.example.org"
            assert settings.refresh_token_expiry == timedelta(hours=48)

    def test_unprefixed_env_ignored(self):
        with patch.dict(os.environ, {"API_PORT": "9999"}):
            assert Settings().api_port == 8090

    def test_loads_secrets_from_env(self):
        with patch.dict(os.environ, {
            "USERHUB_JWT_SECRET": "jwt-secret",
            "USERHUB_SESSION_SECRET": "session-secret",
            "USERHUB_DATABASE_URL": "postgresql://u:p@db/users",
        }):
            settings = Settings()
            assert settings.jwt_secret == "jwt-secret"
            assert settings.session_secret == "session-secret"
            assert settings.database_url == "postgresql://u:p@db/users"


class TestGetSettings:
    def test_get_settings_cached(self):
        """get_settings should return the same instance."""
        get_settings.cache_clear()
        first = get_settings()
        second = get_settings()
        assert first is second
        get_settings.cache_clear()
