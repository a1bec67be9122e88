"""Custom exception hierarchy for the mass combat tracker.

All exceptions inherit from MassCombatError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Most roster operations never raise: unknown combatants are silent no-ops and
unreadable session files collapse to "no session". Exceptions here are raised
by the storage layer and by configuration loading.

Example:
    >>> from mass_combat.core.exceptions import TemplateNotFoundError
    >>> raise TemplateNotFoundError("Monster not found", template_name="Goblin")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class MassCombatError(Exception):
    """Base exception for all mass combat tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Encounter Domain Exceptions
# =============================================================================


class EncounterError(MassCombatError):
    """Base exception for errors raised while running an encounter."""


class DiceRollError(EncounterError):
    """Raised when the underlying dice library rejects a roll.

    Resolution functions sanitize their inputs before rolling, so this only
    surfaces when the dice library itself fails.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Domain Exceptions
# =============================================================================


class StorageError(MassCombatError):
    """Base exception for file storage errors."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with path context.

        Args:
            message: Human-readable error description.
            path: Filesystem path involved in the failure.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path is not None:
            combined_details["path"] = str(path)
        super().__init__(message, details=combined_details)


class TemplateStoreError(StorageError):
    """Raised when a monster template cannot be written or removed."""


class TemplateNotFoundError(TemplateStoreError):
    """Raised when a named monster template does not exist in the store."""

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the missing template's name.

        Args:
            message: Human-readable error description.
            template_name: Name of the template that was requested.
            path: Filesystem path that was looked up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if template_name:
            combined_details["template_name"] = template_name
        super().__init__(message, path=path, details=combined_details)


class AttackNotFoundError(TemplateStoreError):
    """Raised when removing an attack that a template does not define."""

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        attack_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with template and attack context.

        Args:
            message: Human-readable error description.
            template_name: Name of the template that was edited.
            attack_name: Name of the attack that was not found.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if template_name:
            combined_details["template_name"] = template_name
        if attack_name:
            combined_details["attack_name"] = attack_name
        super().__init__(message, details=combined_details)


class SessionPersistenceError(StorageError):
    """Raised when the active session file cannot be written."""


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(MassCombatError):
    """Raised when application configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(MassCombatError):
    """Raised when operator-supplied data fails validation."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
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
]
