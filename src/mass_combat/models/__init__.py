"""Pydantic V2 schemas for the mass combat tracker.

Modules:
    enums: Ability names.
    templates: MonsterTemplate and AttackDefinition reference data.
    combat: Combatant instances and the persisted Session snapshot.
"""

from __future__ import annotations

from mass_combat.models.combat import Combatant, Session, parse_ordinal
from mass_combat.models.enums import Ability
from mass_combat.models.templates import AttackDefinition, MonsterTemplate


__all__ = [
    "Ability",
    "AttackDefinition",
    "MonsterTemplate",
    "Combatant",
    "Session",
    "parse_ordinal",
]
