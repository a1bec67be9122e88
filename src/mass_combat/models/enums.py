"""Enumerations shared across the mass combat models."""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six D&D 5E abilities, keyed by their short names."""

    STR = "str"
    DEX = "dex"
    CON = "con"
    INT = "int"
    WIS = "wis"
    CHA = "cha"

    @property
    def label(self) -> str:
        """Capitalized short name as shown on save buttons (``"Str"``)."""
        return self.value.capitalize()


__all__ = [
    "Ability",
]
