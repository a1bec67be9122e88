"""Roster reconciliation.

When the operator edits an encounter mid-fight, the live roster is rebuilt
to match the new desired composition while keeping as much existing state
as possible:

1. Live combatants are grouped by template name.
2. For each ``(template, desired_count)`` in order, the lowest-numbered
   existing instances are kept unchanged (same name, same HP). Missing
   instances are created with ordinals continuing from the highest ordinal
   already placed for that template, skipping any name still held by
   another template's instance. Surplus instances are dropped; they
   are not counted as kills.
3. Templates missing from the desired list are removed entirely.

The result is the concatenation of each template's instances in
desired-list order. The function never raises for well-typed input.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mass_combat.core.logging import get_logger
from mass_combat.engine.naming import (
    format_instance_name,
    instance_sort_key,
    max_ordinal,
    next_free_ordinal,
)
from mass_combat.models.combat import Combatant
from mass_combat.models.templates import MonsterTemplate


logger = get_logger(__name__)

Selection = tuple[MonsterTemplate, int]


def group_by_template(combatants: Iterable[Combatant]) -> dict[str, list[Combatant]]:
    """Group combatants by template name, preserving first-seen order."""
    groups: dict[str, list[Combatant]] = {}
    for combatant in combatants:
        groups.setdefault(combatant.template.name, []).append(combatant)
    return groups


def reconcile(
    desired: Sequence[Selection],
    live: Sequence[Combatant],
) -> list[Combatant]:
    """Compute a new live sequence for a desired composition.

    Args:
        desired: Ordered ``(template, desired_count)`` pairs.
        live: Current live combatants.

    Returns:
        The new live sequence. Kept combatants are the same objects that
        were passed in.
    """
    existing = group_by_template(live)
    desired_names = {template.name for template, _ in desired}
    taken = {c.instance_name for c in live if c.template.name in desired_names}
    result: list[Combatant] = []

    for template, desired_count in desired:
        wanted = max(desired_count, 0)
        group = sorted(existing.pop(template.name, []), key=instance_sort_key)

        kept = group[:wanted]
        dropped = len(group) - len(kept)
        result.extend(kept)

        missing = wanted - len(kept)
        if missing > 0:
            already_placed = any(c.template.name == template.name for c in result)
            if wanted == 1 and not already_placed and template.name not in taken:
                taken.add(template.name)
                result.append(Combatant.spawn(template, template.name))
            else:
                ordinal = max_ordinal(result, template.name)
                for _ in range(missing):
                    ordinal = next_free_ordinal(template.name, ordinal + 1, taken)
                    name = format_instance_name(template.name, ordinal)
                    taken.add(name)
                    result.append(Combatant.spawn(template, name))

        if dropped or missing > 0:
            logger.debug(
                "Template reconciled",
                template=template.name,
                kept=len(kept),
                created=max(missing, 0),
                dropped=dropped,
            )

    for template_name, removed in existing.items():
        logger.debug("Template removed", template=template_name, dropped=len(removed))

    return result


__all__ = [
    "Selection",
    "group_by_template",
    "reconcile",
]
