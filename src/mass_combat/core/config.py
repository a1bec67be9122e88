"""Configuration management for the mass combat tracker.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files, and runtime overrides.

Example:
    >>> from mass_combat.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.storage.session_path.name
    'active_simulation.json'

Environment Variables:
    MASS_COMBAT_DATA_DIR: Directory holding templates and the saved session
    MASS_COMBAT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MASS_COMBAT_ENCOUNTER_LOG_CAPACITY: Number of console lines retained
    MASS_COMBAT_ENCOUNTER_HP_FLOOR: Lowest HP value set_hp will store
    MASS_COMBAT_ENCOUNTER_CLAMP_HP_TO_MAX: Cap set_hp at a combatant's max HP
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mass_combat.core.constants import (
    DEFAULT_DATA_DIRNAME,
    DEFAULT_LOG_CAPACITY,
    DEFAULT_SESSION_FILENAME,
    DEFAULT_TEMPLATES_DIRNAME,
    DEFAULT_TIMESTAMP_FORMAT,
)
from mass_combat.core.exceptions import ConfigurationError


def default_data_dir() -> Path:
    """Per-user data directory (``~/.config/MonsterMan``)."""
    return Path.home() / ".config" / DEFAULT_DATA_DIRNAME


class StorageSettings(BaseSettings):
    """Configuration for file storage paths.

    Attributes:
        data_dir: Root directory for templates and the saved session.
        templates_dirname: Subdirectory holding one JSON file per template.
        session_filename: File name of the saved encounter.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASS_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default_factory=default_data_dir,
        description="Root directory for templates and the saved session",
    )
    templates_dirname: str = Field(
        default=DEFAULT_TEMPLATES_DIRNAME,
        min_length=1,
        description="Subdirectory holding monster templates",
    )
    session_filename: str = Field(
        default=DEFAULT_SESSION_FILENAME,
        min_length=1,
        description="File name of the saved encounter",
    )

    @field_validator("templates_dirname", "session_filename", mode="after")
    @classmethod
    def reject_nested_paths(cls, value: str) -> str:
        """Ensure names are single path components.

        Raises:
            ConfigurationError: If the name contains a path separator.
        """
        if "/" in value or "\\" in value:
            raise ConfigurationError(
                f"Expected a plain file name, got {value!r}",
                config_key="storage",
            )
        return value

    @property
    def templates_path(self) -> Path:
        """Directory of the template store."""
        return self.data_dir / self.templates_dirname

    @property
    def session_path(self) -> Path:
        """Canonical location of the saved session."""
        return self.data_dir / self.session_filename


class EncounterSettings(BaseSettings):
    """Configuration for encounter behaviour.

    Attributes:
        log_capacity: Number of console lines retained.
        hp_floor: Lowest value set_hp stores; None disables the floor.
        clamp_hp_to_max: Whether set_hp caps values at max_hp.
        timestamp_format: strftime format for console line timestamps.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASS_COMBAT_ENCOUNTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_capacity: int = Field(
        default=DEFAULT_LOG_CAPACITY,
        ge=1,
        le=10_000,
        description="Console lines retained",
    )
    hp_floor: int | None = Field(
        default=None,
        description="Lowest HP value stored by set_hp",
    )
    clamp_hp_to_max: bool = Field(
        default=False,
        description="Cap set_hp at max HP",
    )
    timestamp_format: str = Field(
        default=DEFAULT_TIMESTAMP_FORMAT,
        min_length=1,
        description="Console timestamp format",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log records instead of console output.
        storage: File storage settings.
        encounter: Encounter behaviour settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASS_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Mass Combat Decider",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log records",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    encounter: EncounterSettings = Field(default_factory=EncounterSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "EncounterSettings",
    "Settings",
    "default_data_dir",
    "get_settings",
    "clear_settings_cache",
]
