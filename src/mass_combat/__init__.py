"""Mass Combat Decider - encounter tracking for many monsters at once.

A game master spawns reusable monster templates into a live roster,
resolves attacks and saves with full dice breakdowns, kills instances,
edits the roster mid-fight without losing progress, and saves the
encounter to resume it after a restart.

Example:
    >>> from mass_combat import Encounter, TemplateStore, get_settings
    >>>
    >>> settings = get_settings()
    >>> store = TemplateStore(settings.storage.templates_path)
    >>> goblin = store.get("Goblin")
    >>>
    >>> encounter = Encounter.from_settings(settings)
    >>> if not encounter.resume():
    ...     encounter.start_new([(goblin, 3)])
    >>> encounter.resolve_attack("Goblin 1", "Scimitar")
    >>> encounter.kill("Goblin 2")
    >>> encounter.save_session()

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for templates, combatants, and sessions.
    engine: Dice, resolution, roster, reconciliation, and the encounter.
    storage: Template store and saved-session persistence.
"""

from __future__ import annotations

# Core
from mass_combat.core.config import Settings, get_settings
from mass_combat.core.exceptions import MassCombatError
from mass_combat.core.logging import configure_from_settings, configure_logging, get_logger

# Models
from mass_combat.models import (
    Ability,
    AttackDefinition,
    Combatant,
    MonsterTemplate,
    Session,
)

# Engine
from mass_combat.engine import (
    DiceRoller,
    Encounter,
    EventLog,
    Roster,
    reconcile,
    resolve_attack,
    resolve_save,
    roll_damage,
)

# Storage
from mass_combat.storage import SessionStore, TemplateStore, selections_from_counts


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "MassCombatError",
    "Settings",
    "get_settings",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "AttackDefinition",
    "Combatant",
    "MonsterTemplate",
    "Session",
    # Engine
    "DiceRoller",
    "Encounter",
    "EventLog",
    "Roster",
    "reconcile",
    "resolve_attack",
    "resolve_save",
    "roll_damage",
    # Storage
    "SessionStore",
    "TemplateStore",
    "selections_from_counts",
]
