"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads happen here. No module should call os.getenv()
or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. jwt_secret -> JWT_SECRET, port -> PORT).

  @model_validator(mode="after"): Enforces the startup contract. A missing
      JWT_SECRET is a hard failure -- there is no generated or default key,
      because tokens signed with a guessable secret are trivially forgeable.

Layer rule: core/ is the kernel. This module may not import from api/ or auth/.
"""

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("miniauth.config")


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Every field except jwt_secret has a default, so the only thing an operator
    must provide is JWT_SECRET.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------

    host: str = "0.0.0.0"  # nosec B104 -- bind address is operator-configurable
    port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured"; the validator below
    # refuses to build Settings in that state.
    jwt_secret: str = ""
    token_expire_seconds: int = Field(default=3600, gt=0)
    # bcrypt log2 cost factor. 4 is the library minimum (tests use it).
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_jwt_secret(self) -> "Settings":
        """Refuse to start without a signing secret.

        Whitespace-only values are treated as missing. No fallback key is
        generated in any mode.
        """
        if not self.jwt_secret.strip():
            raise ValueError(
                "JWT_SECRET is not set. Define it in your environment or a .env file before starting the server."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
