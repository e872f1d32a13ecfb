"""Configuration module for apppack settings.

Values come from the environment (``APPPACK_`` prefix) or a local ``.env`` file.
The linter options themselves are fixed in ``apppack.linter`` and are not
configurable here; only how the linter is invoked is.
"""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APPPACK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Executable used for linting app.js (must be on PATH or an absolute path)
    jshint_command: str = "jshint"
    jshint_timeout: int = 30

    log_level: str = "INFO"
    log_dir: Optional[str] = None


settings = Settings()


def get_settings() -> Settings:
    """Return a fresh Settings instance, re-reading the environment."""

    return Settings()
