"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for ProjectHub happen here. No module should
call os.getenv() or os.environ.get() directly -- build a Settings object (or
call get_settings()) and pass it into create_app().

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Type coercion and validation
      are built in. The signing secret accepts both JWT_SECRET and SECRET_KEY.

Security notes:
  A missing signing secret is a hard startup failure. There is no generated
  fallback key: tokens signed with a random key would silently stop verifying
  after every restart.

  Secrets shorter than 32 chars are rejected outright. HS256 signing relies on
  key entropy -- a short key weakens every issued token.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or projects/.
"""

import logging
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("projecthub.config")

# Seven days, the lifetime of every issued token.
DEFAULT_TOKEN_EXPIRE_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Every field except secret_key has a default. Tests construct Settings
    directly with keyword arguments (populate_by_name) instead of mutating
    the process environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured"; the validator below
    # turns it into a startup failure so callers never see "".
    secret_key: str = Field(
        default="",
        validation_alias=AliasChoices("secret_key", "JWT_SECRET", "SECRET_KEY"),
        validate_default=True,
    )
    token_expire_seconds: int = Field(default=DEFAULT_TOKEN_EXPIRE_SECONDS, gt=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------

    database_url: str = "sqlite:///projecthub.db"

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = "0.0.0.0"  # noqa: S104 # nosec B104 -- container default
    port: int = 5000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Refuse to start without a usable signing secret."""
        if not value:
            raise ValueError(
                "JWT_SECRET is required. Set JWT_SECRET (or SECRET_KEY) in your environment or .env file."
            )
        if len(value) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters.")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
