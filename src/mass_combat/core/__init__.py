"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        MassCombatError: Base exception for all application errors.
        StorageError, TemplateStoreError, TemplateNotFoundError,
        AttackNotFoundError, SessionPersistenceError: Storage failures.
        EncounterError, DiceRollError: Encounter failures.
        ConfigurationError, ValidationError: Configuration and input errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        configure_from_settings: Set up logging from Settings.
"""

from __future__ import annotations

from mass_combat.core.config import (
    EncounterSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from mass_combat.core.exceptions import (
    AttackNotFoundError,
    ConfigurationError,
    DiceRollError,
    EncounterError,
    MassCombatError,
    SessionPersistenceError,
    StorageError,
    TemplateNotFoundError,
    TemplateStoreError,
    ValidationError,
)
from mass_combat.core.logging import (
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "MassCombatError",
    "EncounterError",
    "DiceRollError",
    "StorageError",
    "TemplateStoreError",
    "TemplateNotFoundError",
    "AttackNotFoundError",
    "SessionPersistenceError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "StorageSettings",
    "EncounterSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "configure_from_settings",
]
