"""Instance naming scheme.

Spawned instances are named after their template. A lone instance keeps
the bare template name (``"Goblin"``); batches get 1-based ordinals
(``"Goblin 1"``, ``"Goblin 2"``). Ordinals of live instances are never
reused or renumbered.

Template names may themselves end in a number, so ``"Goblin 2"`` can be
both a template and an instance of ``"Goblin"``. Generated names skip any
name already in use, whichever template holds it.
"""

from __future__ import annotations

from collections.abc import Container, Iterable

from mass_combat.models.combat import Combatant


def format_instance_name(template_name: str, ordinal: int | None) -> str:
    """Build an instance name; ``None`` yields the bare template name."""
    if ordinal is None:
        return template_name
    return f"{template_name} {ordinal}"


def next_free_ordinal(template_name: str, start: int, taken: Container[str]) -> int:
    """Smallest ordinal >= ``start`` whose instance name is not taken."""
    ordinal = start
    while format_instance_name(template_name, ordinal) in taken:
        ordinal += 1
    return ordinal


def instance_sort_key(combatant: Combatant) -> tuple[int, str]:
    """Sort key ordering same-template instances by ordinal.

    A bare-named instance sorts first; ties fall back to the name so the
    order is total.
    """
    return (combatant.ordinal or 0, combatant.instance_name)


def max_ordinal(combatants: Iterable[Combatant], template_name: str) -> int:
    """Highest ordinal among instances of a template (0 if none)."""
    return max(
        (c.ordinal or 0 for c in combatants if c.template.name == template_name),
        default=0,
    )


__all__ = [
    "format_instance_name",
    "instance_sort_key",
    "max_ordinal",
    "next_free_ordinal",
]
