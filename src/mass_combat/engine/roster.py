"""The encounter roster.

A Roster owns the ordered live combatants and the append-only list of
killed combatants for one encounter.

Reentrancy policy:
    Every public mutating operation first tries to take the roster's
    exclusive guard without blocking. If the guard is already held (for
    example a console refresh triggered from inside another mutation calls
    back into the roster), the operation is skipped as a silent no-op and
    reports that nothing was applied. State is never corrupted and no
    error is raised.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from mass_combat.core.logging import get_logger
from mass_combat.engine.naming import format_instance_name, next_free_ordinal
from mass_combat.engine.reconcile import Selection, reconcile
from mass_combat.models.combat import Combatant, Session


logger = get_logger(__name__)


def spawn_combatants(selections: Sequence[Selection]) -> list[Combatant]:
    """Create fresh combatants for an ordered template/count selection.

    A template requested once gets its bare name; otherwise instances are
    numbered from 1. Numbering continues across repeated entries for the
    same template and skips names another template already produced
    (``"Goblin 2"`` the template versus the second ``"Goblin"``).

    Args:
        selections: Ordered ``(template, count)`` pairs; non-positive
            counts are skipped.

    Returns:
        New combatants at full health.
    """
    counters: dict[str, int] = {}
    taken: set[str] = set()
    combatants: list[Combatant] = []

    for template, count in selections:
        if count <= 0:
            continue
        for _ in range(count):
            if count == 1 and template.name not in counters and template.name not in taken:
                name = template.name
                counters[template.name] = 1
            else:
                start = counters.get(template.name, 0) + 1
                ordinal = next_free_ordinal(template.name, start, taken)
                counters[template.name] = ordinal
                name = format_instance_name(template.name, ordinal)
            taken.add(name)
            combatants.append(Combatant.spawn(template, name))

    return combatants


class Roster:
    """Live and killed combatants of one encounter.

    Attributes:
        hp_floor: Lowest value set_hp stores, or None for no floor.
        clamp_hp_to_max: Whether set_hp caps values at max_hp.

    Example:
        >>> roster = Roster.spawn([(goblin, 3)])
        >>> [c.instance_name for c in roster.live]
        ['Goblin 1', 'Goblin 2', 'Goblin 3']
        >>> roster.kill("Goblin 2")
    """

    def __init__(
        self,
        live: Sequence[Combatant] = (),
        killed: Sequence[Combatant] = (),
        *,
        hp_floor: int | None = None,
        clamp_hp_to_max: bool = False,
    ) -> None:
        self._live: list[Combatant] = list(live)
        self._killed: list[Combatant] = list(killed)
        self._guard = threading.Lock()
        self.hp_floor = hp_floor
        self.clamp_hp_to_max = clamp_hp_to_max

    @classmethod
    def spawn(
        cls,
        selections: Sequence[Selection] = (),
        *,
        hp_floor: int | None = None,
        clamp_hp_to_max: bool = False,
    ) -> Roster:
        """Build a fresh roster from a template/count selection.

        Args:
            selections: Ordered ``(template, count)`` pairs.
            hp_floor: Optional floor applied by set_hp.
            clamp_hp_to_max: Whether set_hp caps at max HP.

        Returns:
            A Roster with an empty killed list.
        """
        live = spawn_combatants(selections)
        logger.info("Roster spawned", combatants=len(live))
        return cls(live, hp_floor=hp_floor, clamp_hp_to_max=clamp_hp_to_max)

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def live(self) -> list[Combatant]:
        """Live combatants in roster order."""
        return list(self._live)

    @property
    def killed(self) -> list[Combatant]:
        """Killed combatants in kill order."""
        return list(self._killed)

    def get(self, instance_name: str) -> Combatant | None:
        """Find a live combatant by name."""
        for combatant in self._live:
            if combatant.instance_name == instance_name:
                return combatant
        return None

    def counts(self) -> dict[str, int]:
        """Live instance count per template name, in roster order."""
        counts: dict[str, int] = {}
        for combatant in self._live:
            counts[combatant.template.name] = counts.get(combatant.template.name, 0) + 1
        return counts

    def total_xp(self) -> int:
        """Experience earned from killed combatants."""
        return sum(c.template.xp for c in self._killed)

    def snapshot(self) -> Session:
        """Persistable copy of the current state."""
        return Session(
            combatants=[c.model_copy(deep=True) for c in self._live],
            killed_monsters=[c.model_copy(deep=True) for c in self._killed],
        )

    def __len__(self) -> int:
        return len(self._live)

    def __contains__(self, instance_name: object) -> bool:
        return any(c.instance_name == instance_name for c in self._live)

    # =========================================================================
    # Mutation
    # =========================================================================

    @contextmanager
    def exclusive(self) -> Iterator[bool]:
        """Try to take the mutation guard without blocking.

        Yields:
            True if the guard was acquired; False if another mutation is
            already in progress, in which case the caller must do nothing.
        """
        acquired = self._guard.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                self._guard.release()

    def kill(self, instance_name: str) -> Combatant | None:
        """Move a live combatant to the killed list.

        Args:
            instance_name: Name of the combatant to kill.

        Returns:
            The killed combatant, or None if the name is not live or the
            roster is busy.
        """
        with self.exclusive() as acquired:
            if not acquired:
                logger.debug("Kill skipped, roster busy", combatant=instance_name)
                return None
            for position, combatant in enumerate(self._live):
                if combatant.instance_name == instance_name:
                    del self._live[position]
                    self._killed.append(combatant)
                    logger.info(
                        "Combatant killed",
                        combatant=instance_name,
                        xp=combatant.template.xp,
                    )
                    return combatant
            return None

    def set_hp(self, instance_name: str, value: int) -> Combatant | None:
        """Overwrite a live combatant's current HP.

        No clamping is applied unless the roster was configured with
        ``hp_floor`` or ``clamp_hp_to_max``.

        Args:
            instance_name: Name of the combatant to edit.
            value: New current HP.

        Returns:
            The edited combatant, or None if not found or the roster is busy.
        """
        with self.exclusive() as acquired:
            if not acquired:
                logger.debug("HP edit skipped, roster busy", combatant=instance_name)
                return None
            combatant = self.get(instance_name)
            if combatant is None:
                return None
            if self.hp_floor is not None:
                value = max(value, self.hp_floor)
            if self.clamp_hp_to_max:
                value = min(value, combatant.max_hp)
            combatant.current_hp = value
            return combatant

    def reconcile(self, desired: Sequence[Selection]) -> bool:
        """Rebuild the live list for a new composition, keeping state.

        Args:
            desired: Ordered ``(template, desired_count)`` pairs.

        Returns:
            True if applied, False if the roster was busy.
        """
        with self.exclusive() as acquired:
            if not acquired:
                logger.debug("Reconcile skipped, roster busy")
                return False
            before = len(self._live)
            self._live = reconcile(desired, self._live)
            logger.info("Roster reconciled", before=before, after=len(self._live))
            return True

    def restore(self, session: Session) -> bool:
        """Append a loaded session's combatants to this roster.

        Names are not re-validated; sessions are produced by this engine.

        Returns:
            True if applied, False if the roster was busy.
        """
        with self.exclusive() as acquired:
            if not acquired:
                logger.debug("Restore skipped, roster busy")
                return False
            self._live.extend(session.combatants)
            self._killed.extend(session.killed_monsters)
            logger.info(
                "Session restored",
                combatants=len(session.combatants),
                killed=len(session.killed_monsters),
            )
            return True


__all__ = [
    "Roster",
    "spawn_combatants",
]
