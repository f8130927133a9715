"""Scaffolder process settings using pydantic-settings.

This module defines the ScaffolderSettings class that reads process-level
configuration from environment variables with the SCAFFOLDER_ prefix.
Integration tokens and other app configuration live in the YAML app
config file that ``config_path`` points at.
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ScaffolderSettings(BaseSettings):
    """Scaffolder configuration from environment variables.

    All environment variables are prefixed with SCAFFOLDER_ (e.g.,
    SCAFFOLDER_CONFIG_PATH). Every field has a default.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCAFFOLDER_",
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # App Configuration
    # -------------------------------------------------------------------------
    # YAML file holding integrations and scaffolder settings
    config_path: str = "app-config.yaml"

    # -------------------------------------------------------------------------
    # Workspace Configuration
    # -------------------------------------------------------------------------
    # Where temporary template directories are created; system temp if unset
    working_directory: Optional[str] = None

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------
    log_level: str = "INFO"

    # Render log events as JSON lines; console rendering otherwise
    log_json: bool = True

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("working_directory")
    @classmethod
    def validate_working_directory(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the working directory is an absolute path."""
        if v is None:
            return v
        if not Path(v).is_absolute():
            raise ValueError("working_directory must be an absolute path")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is a known stdlib logging level."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level


def get_settings() -> ScaffolderSettings:
    """Create and return a ScaffolderSettings instance.

    Raises:
        pydantic.ValidationError: If a value is invalid.
    """
    return ScaffolderSettings()
