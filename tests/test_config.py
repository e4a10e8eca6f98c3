"""Unit tests for core/config.py -- startup validation of Settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_TOKEN_EXPIRE_SECONDS, Settings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("JWT_SECRET", "SECRET_KEY", "PORT", "DATABASE_URL", "BCRYPT_ROUNDS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_missing_secret_is_fatal(clean_env) -> None:
    with pytest.raises(ValidationError, match="JWT_SECRET is required"):
        Settings(_env_file=None)


def test_short_secret_rejected(clean_env) -> None:
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(_env_file=None, secret_key="too-short")


def test_secret_read_from_jwt_secret_env(clean_env) -> None:
    clean_env.setenv("JWT_SECRET", "a" * 40)
    assert Settings(_env_file=None).secret_key == "a" * 40


def test_secret_read_from_secret_key_env(clean_env) -> None:
    clean_env.setenv("SECRET_KEY", "b" * 40)
    assert Settings(_env_file=None).secret_key == "b" * 40


def test_defaults(clean_env) -> None:
    settings = Settings(_env_file=None, secret_key="c" * 32)
    assert settings.port == 5000
    assert settings.token_expire_seconds == DEFAULT_TOKEN_EXPIRE_SECONDS == 7 * 24 * 3600
    assert settings.bcrypt_rounds == 10
    assert settings.cors_origins == ["*"]


def test_port_from_env(clean_env) -> None:
    clean_env.setenv("PORT", "8080")
    assert Settings(_env_file=None, secret_key="c" * 32).port == 8080


def test_secret_not_in_repr(clean_env) -> None:
    """The signing secret must never appear in logs via repr(TokenService)."""
    from auth.tokens import TokenService

    secret = "d" * 40
    assert secret not in repr(TokenService(secret))
