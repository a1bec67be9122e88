"""Encounter engine for the mass combat tracker.

Submodules:
    dice: Dice rolling via the d20 library
    resolution: Attack, saving-throw attack, and ability save resolution
    event_log: Bounded combat console
    naming: Instance naming scheme
    roster: Live/killed combatants with the no-op-on-contention guard
    reconcile: State-preserving roster reconciliation
    encounter: Operator-facing controller and action dispatch
"""

from __future__ import annotations

from mass_combat.engine.dice import DamageRoll, DiceRoller, format_damage, roll_damage
from mass_combat.engine.encounter import (
    Action,
    ActionResult,
    Encounter,
    KillAction,
    MakeSaveAction,
    ReconcileAction,
    SetHpAction,
    UseAttackAction,
)
from mass_combat.engine.event_log import EventLog
from mass_combat.engine.reconcile import Selection, reconcile
from mass_combat.engine.resolution import (
    AttackResolution,
    SaveResolution,
    SubAttackResult,
    resolve_attack,
    resolve_save,
)
from mass_combat.engine.roster import Roster, spawn_combatants


__all__ = [
    # Dice
    "DamageRoll",
    "DiceRoller",
    "format_damage",
    "roll_damage",
    # Resolution
    "AttackResolution",
    "SaveResolution",
    "SubAttackResult",
    "resolve_attack",
    "resolve_save",
    # Console
    "EventLog",
    # Roster
    "Roster",
    "Selection",
    "reconcile",
    "spawn_combatants",
    # Encounter
    "Action",
    "ActionResult",
    "Encounter",
    "KillAction",
    "MakeSaveAction",
    "ReconcileAction",
    "SetHpAction",
    "UseAttackAction",
]
