"""Operator-facing encounter controller.

The Encounter ties together the roster, the dice roller, the combat
console, and the saved-session store. Presentation code calls its methods
(or passes action objects to ``handle``) in response to discrete operator
actions; nothing runs in the background.

Example:
    >>> encounter = Encounter.from_settings()
    >>> if not encounter.resume():
    ...     encounter.start_new([(goblin, 3)])
    >>> encounter.resolve_attack("Goblin 1", "Scimitar")
    >>> encounter.log_tail(5)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from mass_combat.core.config import EncounterSettings, Settings
from mass_combat.core.exceptions import SessionPersistenceError
from mass_combat.core.logging import configure_from_settings, get_logger
from mass_combat.engine.dice import DiceRoller, get_default_roller
from mass_combat.engine.event_log import EventLog
from mass_combat.engine.reconcile import Selection
from mass_combat.engine.resolution import (
    AttackResolution,
    Clock,
    SaveResolution,
    resolve_attack,
    resolve_save,
)
from mass_combat.engine.roster import Roster
from mass_combat.models.combat import Combatant, Session
from mass_combat.models.enums import Ability
from mass_combat.storage.session_store import SessionStore


logger = get_logger(__name__)


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class KillAction:
    """Kill a live combatant."""

    instance_name: str


@dataclass(frozen=True)
class SetHpAction:
    """Overwrite a combatant's current HP."""

    instance_name: str
    value: int


@dataclass(frozen=True)
class UseAttackAction:
    """Use one of a combatant's attacks."""

    instance_name: str
    attack_name: str


@dataclass(frozen=True)
class MakeSaveAction:
    """Roll an ability save for a combatant."""

    instance_name: str
    ability: Ability | str


@dataclass(frozen=True)
class ReconcileAction:
    """Change the encounter's composition."""

    desired: tuple[Selection, ...]


Action = KillAction | SetHpAction | UseAttackAction | MakeSaveAction | ReconcileAction


@dataclass
class ActionResult:
    """Outcome of handling an operator action.

    Attributes:
        action: The action that was handled.
        applied: Whether the action changed or produced anything.
        log_lines: Console lines produced by the action.
    """

    action: Action
    applied: bool
    log_lines: list[str] = field(default_factory=list)


# =============================================================================
# Encounter
# =============================================================================


class Encounter:
    """A running encounter and its operator-facing operations."""

    def __init__(
        self,
        session_store: SessionStore,
        *,
        settings: EncounterSettings | None = None,
        roster: Roster | None = None,
        roller: DiceRoller | None = None,
        now: Clock | None = None,
    ) -> None:
        """Initialize the encounter.

        Args:
            session_store: Where the encounter is saved and resumed from.
            settings: Console capacity, HP clamping, and timestamp format.
            roster: Existing roster; an empty one is created otherwise.
            roller: Dice source; defaults to the shared roller.
            now: Clock for console timestamps.
        """
        self.settings = settings or EncounterSettings()
        self.session_store = session_store
        self.roller = roller or get_default_roller()
        self.now = now
        self.log = EventLog(capacity=self.settings.log_capacity)
        self.roster = roster if roster is not None else self._new_roster(())

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs) -> Encounter:
        """Build an encounter from application settings.

        Applies the logging configuration and uses the configured session
        location and encounter behaviour.
        """
        settings = configure_from_settings(settings)
        return cls(
            SessionStore(settings.storage.session_path),
            settings=settings.encounter,
            **kwargs,
        )

    def _new_roster(self, selections: Sequence[Selection]) -> Roster:
        return Roster.spawn(
            selections,
            hp_floor=self.settings.hp_floor,
            clamp_hp_to_max=self.settings.clamp_hp_to_max,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def spawn(self, selections: Sequence[Selection]) -> Roster:
        """Replace the roster with freshly spawned combatants."""
        self.roster = self._new_roster(selections)
        return self.roster

    def start_new(self, selections: Sequence[Selection]) -> Roster:
        """Start a brand-new encounter, discarding any saved one first."""
        self.discard_session()
        return self.spawn(selections)

    def resume(self) -> bool:
        """Resume the saved encounter, if there is one.

        The roster is replaced by an empty spawn and the saved combatants
        are appended to it. The saved file is consumed.

        Returns:
            True if a saved encounter was resumed.
        """
        self.spawn(())
        session = self.try_load_session()
        if session is None:
            return False
        return self.roster.restore(session)

    def reconcile(self, desired: Sequence[Selection]) -> bool:
        """Change the composition while keeping existing combatants."""
        return self.roster.reconcile(desired)

    # =========================================================================
    # Combatant actions
    # =========================================================================

    def kill(self, instance_name: str) -> Combatant | None:
        return self.roster.kill(instance_name)

    def set_hp(self, instance_name: str, value: int) -> Combatant | None:
        return self.roster.set_hp(instance_name, value)

    def resolve_attack(self, instance_name: str, attack_name: str) -> AttackResolution | None:
        """Use a named attack of a live combatant and log the results.

        Returns:
            The resolution, or None if the combatant or attack is unknown.
        """
        combatant = self.roster.get(instance_name)
        if combatant is None:
            return None
        attack = combatant.template.get_attack(attack_name)
        if attack is None:
            logger.debug("Unknown attack", combatant=instance_name, attack=attack_name)
            return None
        resolution = resolve_attack(
            combatant,
            attack,
            roller=self.roller,
            now=self.now,
            timestamp_format=self.settings.timestamp_format,
        )
        self.log.extend(resolution.log_lines)
        return resolution

    def resolve_save(self, instance_name: str, ability: Ability | str) -> SaveResolution | None:
        """Roll an ability save for a live combatant and log it.

        Returns:
            The resolution, or None if the combatant is unknown.
        """
        combatant = self.roster.get(instance_name)
        if combatant is None:
            return None
        resolution = resolve_save(
            combatant,
            ability,
            roller=self.roller,
            now=self.now,
            timestamp_format=self.settings.timestamp_format,
        )
        self.log.append(resolution.log_line)
        return resolution

    # =========================================================================
    # Persistence
    # =========================================================================

    def save_session(self) -> bool:
        """Save the encounter for later resumption.

        Write failures are logged; the in-memory roster is unaffected.

        Returns:
            True if the session was written.
        """
        try:
            self.session_store.save(self.roster.snapshot())
        except SessionPersistenceError as exc:
            logger.error("Session save failed", error=exc.message, **exc.details)
            return False
        return True

    def try_load_session(self) -> Session | None:
        return self.session_store.try_load()

    def discard_session(self) -> bool:
        return self.session_store.discard()

    # =========================================================================
    # Reporting
    # =========================================================================

    def total_xp(self) -> int:
        return self.roster.total_xp()

    def log_tail(self, n: int) -> list[str]:
        return self.log.tail(n)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def handle(self, action: Action) -> ActionResult:
        """Apply an operator action.

        Args:
            action: One of the action dataclasses.

        Returns:
            ActionResult describing whether anything happened and which
            console lines were produced.

        Raises:
            TypeError: If the action type is not recognised.
        """
        if isinstance(action, KillAction):
            return ActionResult(action, self.kill(action.instance_name) is not None)
        if isinstance(action, SetHpAction):
            edited = self.set_hp(action.instance_name, action.value)
            return ActionResult(action, edited is not None)
        if isinstance(action, UseAttackAction):
            resolution = self.resolve_attack(action.instance_name, action.attack_name)
            if resolution is None:
                return ActionResult(action, False)
            return ActionResult(action, True, list(resolution.log_lines))
        if isinstance(action, MakeSaveAction):
            save = self.resolve_save(action.instance_name, action.ability)
            if save is None:
                return ActionResult(action, False)
            return ActionResult(action, True, [save.log_line])
        if isinstance(action, ReconcileAction):
            return ActionResult(action, self.reconcile(action.desired))
        raise TypeError(f"Unsupported action: {action!r}")


__all__ = [
    "Action",
    "ActionResult",
    "Encounter",
    "KillAction",
    "MakeSaveAction",
    "ReconcileAction",
    "SetHpAction",
    "UseAttackAction",
]
