"""Dice rolling mechanics for D&D 5E.

Individual dice are rolled with the d20 library. Results keep every
individual die so the combat console can show the full breakdown, e.g.
``"4 + 2 + 3 = 9"``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import d20

from mass_combat.core.constants import D20
from mass_combat.core.exceptions import DiceRollError
from mass_combat.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DamageRoll:
    """Outcome of a damage roll.

    Attributes:
        total: Sum of the dice plus the flat modifier.
        rolls: Individual die results in roll order.
        modifier: Flat modifier added to the dice.
        formula: Human-readable breakdown ending in ``" = <total>"``.
    """

    total: int
    rolls: tuple[int, ...]
    modifier: int
    formula: str


def format_damage(rolls: tuple[int, ...] | list[int], modifier: int, total: int) -> str:
    """Render a damage breakdown.

    The modifier segment is shown when it is non-zero, or when no dice were
    rolled so the formula is never empty.

    Args:
        rolls: Individual die results.
        modifier: Flat modifier.
        total: Final total.

    Returns:
        Formula such as ``"3 + 5 + 2 = 10"`` or ``"0 = 0"``.
    """
    parts = [str(r) for r in rolls]
    if modifier != 0 or not parts:
        parts.append(str(modifier))
    return f"{' + '.join(parts)} = {total}"


class DiceRoller:
    """Dice rolling with D&D 5E mechanics.

    Each call draws fresh values; there is no hidden state beyond the
    random source. Tests substitute a subclass that overrides ``roll_die``.

    Example:
        >>> roller = DiceRoller()
        >>> damage = roller.roll_damage(2, 6, 3)
        >>> 5 <= damage.total <= 15
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll_die(self, die_size: int) -> int:
        """Roll a single die.

        Args:
            die_size: Number of faces; values below 1 are treated as 1.

        Returns:
            A uniform integer in ``[1, die_size]``.

        Raises:
            DiceRollError: If the dice library fails.
        """
        expression = f"1d{max(die_size, 1)}"
        try:
            return d20.roll(expression).total
        except d20.RollError as exc:
            raise DiceRollError(
                f"Dice roll failed: {exc}",
                expression=expression,
            ) from exc

    def roll_d20(self) -> int:
        """Roll one d20 for an attack or save."""
        return self.roll_die(D20)

    def roll_dice(self, dice_count: int, die_size: int) -> tuple[int, ...]:
        """Roll several independent dice.

        Args:
            dice_count: Number of dice; non-positive counts roll nothing.
            die_size: Faces per die.

        Returns:
            Individual results in roll order.
        """
        return tuple(self.roll_die(die_size) for _ in range(max(dice_count, 0)))

    def roll_damage(self, dice_count: int, die_size: int, flat_modifier: int) -> DamageRoll:
        """Roll damage dice and add a flat modifier.

        Args:
            dice_count: Number of damage dice.
            die_size: Faces per die.
            flat_modifier: Added once to the total (usually an ability modifier).

        Returns:
            DamageRoll with total and formatted breakdown.
        """
        rolls = self.roll_dice(dice_count, die_size)
        total = sum(rolls) + flat_modifier
        result = DamageRoll(
            total=total,
            rolls=rolls,
            modifier=flat_modifier,
            formula=format_damage(rolls, flat_modifier, total),
        )
        logger.debug(
            "Damage rolled",
            dice=f"{len(rolls)}d{die_size}",
            modifier=flat_modifier,
            total=total,
        )
        return result


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Shared roller used when callers do not supply their own."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller


def roll_damage(dice_count: int, die_size: int, flat_modifier: int) -> tuple[int, str]:
    """Convenience function returning ``(total, formula)``.

    Example:
        >>> total, formula = roll_damage(2, 6, 3)
    """
    result = get_default_roller().roll_damage(dice_count, die_size, flat_modifier)
    return result.total, result.formula


__all__ = [
    "DamageRoll",
    "DiceRoller",
    "format_damage",
    "get_default_roller",
    "roll_damage",
]
