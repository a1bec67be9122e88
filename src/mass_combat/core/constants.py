"""Application-wide constants for the mass combat tracker.

This module defines the D&D 5E rules constants used by the resolution
engine, console limits, and the default on-disk layout.
"""

from __future__ import annotations

# =============================================================================
# D&D 5E Rules Constants
# =============================================================================

D20 = 20
"""Die size used for attack rolls and saving throws."""

CRITICAL_ROLL = 20
"""Natural roll that makes an attack a critical hit."""

SAVE_DC_BASE = 8
"""Base of the save DC formula (8 + ability mod + proficiency bonus)."""


# =============================================================================
# Console
# =============================================================================

DEFAULT_LOG_CAPACITY = 50
"""Number of result lines the combat console retains."""

DEFAULT_TIMESTAMP_FORMAT = "%H:%M:%S"
"""strftime format prefixed to every console line."""

# =============================================================================
# Storage Layout
# =============================================================================

SESSION_SCHEMA_VERSION = 1
"""Current version tag written into the session file."""

DEFAULT_DATA_DIRNAME = "MonsterMan"
"""Directory holding templates and the saved session."""

DEFAULT_TEMPLATES_DIRNAME = "Monsters"
"""Subdirectory with one JSON document per monster template."""

DEFAULT_SESSION_FILENAME = "active_simulation.json"
"""File name of the single saved encounter."""


__all__ = [
    # Rules
    "D20",
    "CRITICAL_ROLL",
    "SAVE_DC_BASE",
    # Console
    "DEFAULT_LOG_CAPACITY",
    "DEFAULT_TIMESTAMP_FORMAT",
    # Storage
    "SESSION_SCHEMA_VERSION",
    "DEFAULT_DATA_DIRNAME",
    "DEFAULT_TEMPLATES_DIRNAME",
    "DEFAULT_SESSION_FILENAME",
]
