"""
Tests for environment-driven settings.
"""

from core.config import DEFAULT_DATABASE_URLS, Settings
from core.db import sanitize_database_url


def test_defaults():
    settings = Settings.from_env({})

    assert settings.environment == "development"
    assert settings.database_url == DEFAULT_DATABASE_URLS["development"]
    assert settings.token_ttl_seconds == 86400
    assert settings.bcrypt_rounds == 8
    assert settings.port == 3000
    assert settings.cors_origins == ("*",)
    assert not settings.is_test


def test_database_url_follows_environment():
    assert Settings.from_env({"APP_ENV": "test"}).database_url == DEFAULT_DATABASE_URLS["test"]
    assert Settings.from_env({"APP_ENV": "TEST"}).is_test


def test_database_url_override_wins():
    settings = Settings.from_env({"APP_ENV": "production", "DATABASE_URL": "postgresql://db/prod"})

    assert settings.database_url == "postgresql://db/prod"


def test_malformed_integers_fall_back():
    settings = Settings.from_env({"PORT": "eighty", "TOKEN_TTL_SECONDS": ""})

    assert settings.port == 3000
    assert settings.token_ttl_seconds == 86400


def test_bcrypt_rounds_clamped():
    assert Settings.from_env({"BCRYPT_ROUNDS": "1"}).bcrypt_rounds == 4
    assert Settings.from_env({"BCRYPT_ROUNDS": "99"}).bcrypt_rounds == 31


def test_cors_origins_split():
    settings = Settings.from_env({"CORS_ORIGINS": "http://a.test, http://b.test ,"})

    assert settings.cors_origins == ("http://a.test", "http://b.test")


def test_sslmode_stripped_from_database_url():
    url = "postgresql://u:p@host/db?sslmode=require&application_name=api"

    assert sanitize_database_url(url) == "postgresql://u:p@host/db?application_name=api"
    assert sanitize_database_url("postgresql://host/db") == "postgresql://host/db"
