"""Attack and saving-throw resolution.

Resolution is pure computation over a combatant's template snapshot and a
dice roller. The engine reports numbers; it never decides hits or
successful saves because it does not know the target's stats. Each
resolution carries the console lines it produced.

Attack rolls:
    Every use makes ``attacks_per_turn`` rolls of d20 + ability modifier +
    proficiency bonus. A natural 20 is a critical hit and doubles the
    damage dice for that roll only. Damage adds the ability modifier.

Saving-throw attacks:
    One use reports the save DC (8 + ability modifier + proficiency) and a
    single raw damage roll with no modifier; the operator applies it as
    full or partial damage.

Ability saves:
    d20 + the chosen ability modifier.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from mass_combat.core.constants import CRITICAL_ROLL, DEFAULT_TIMESTAMP_FORMAT
from mass_combat.core.logging import get_logger
from mass_combat.engine.dice import DamageRoll, DiceRoller, get_default_roller
from mass_combat.models.combat import Combatant
from mass_combat.models.enums import Ability
from mass_combat.models.templates import AttackDefinition


logger = get_logger(__name__)

Clock = Callable[[], datetime]


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class SubAttackResult:
    """One attack roll within a multi-attack use.

    Attributes:
        index: 1-based position within the use.
        die_roll: Natural d20 result.
        ability_mod: Modifier of the attack's ability.
        proficiency_bonus: Template proficiency bonus.
        to_hit: die_roll + ability_mod + proficiency_bonus.
        is_critical: Whether the d20 showed a natural 20.
        damage: Damage rolled for this attack.
    """

    index: int
    die_roll: int
    ability_mod: int
    proficiency_bonus: int
    to_hit: int
    is_critical: bool
    damage: DamageRoll

    @property
    def total_modifier(self) -> int:
        return self.ability_mod + self.proficiency_bonus


@dataclass(frozen=True)
class AttackResolution:
    """Everything produced by one use of an attack.

    Attributes:
        combatant_name: Instance that attacked.
        attack_name: Attack that was used.
        is_saving_throw: Whether this was a saving-throw attack.
        sub_attacks: Attack rolls (empty for saving-throw attacks).
        save_dc: DC for saving-throw attacks, otherwise None.
        damage: Raw damage for saving-throw attacks, otherwise None.
        log_lines: Console lines in emission order.
    """

    combatant_name: str
    attack_name: str
    is_saving_throw: bool
    sub_attacks: tuple[SubAttackResult, ...] = ()
    save_dc: int | None = None
    damage: DamageRoll | None = None
    log_lines: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SaveResolution:
    """Outcome of an ability save made by a combatant."""

    combatant_name: str
    ability: Ability
    die_roll: int
    modifier: int
    total: int
    log_line: str

    @property
    def log_lines(self) -> tuple[str, ...]:
        return (self.log_line,)


# =============================================================================
# Resolution
# =============================================================================


def _timestamp(now: Clock | None, timestamp_format: str) -> str:
    return (now or datetime.now)().strftime(timestamp_format)


def resolve_attack(
    combatant: Combatant,
    attack: AttackDefinition,
    *,
    roller: DiceRoller | None = None,
    now: Clock | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> AttackResolution:
    """Resolve one use of an attack.

    Args:
        combatant: The attacking instance; its template snapshot supplies
            the modifiers.
        attack: Attack definition being used.
        roller: Dice source; defaults to the shared roller.
        now: Clock for console timestamps.
        timestamp_format: strftime format for console timestamps.

    Returns:
        AttackResolution with per-roll results and console lines.
    """
    roller = roller or get_default_roller()
    if attack.is_saving_throw:
        return _resolve_saving_throw_attack(combatant, attack, roller, now, timestamp_format)

    template = combatant.template
    ability_mod = template.modifier(attack.ability_used)
    sub_attacks: list[SubAttackResult] = []
    lines: list[str] = []

    for index in range(1, attack.attacks_per_turn + 1):
        die_roll = roller.roll_d20()
        is_critical = die_roll == CRITICAL_ROLL
        dice_count = attack.dice_count * 2 if is_critical else attack.dice_count
        damage = roller.roll_damage(dice_count, attack.damage_die, ability_mod)
        result = SubAttackResult(
            index=index,
            die_roll=die_roll,
            ability_mod=ability_mod,
            proficiency_bonus=template.proficiency_bonus,
            to_hit=die_roll + ability_mod + template.proficiency_bonus,
            is_critical=is_critical,
            damage=damage,
        )
        sub_attacks.append(result)

        crit_message = " -> CRITICAL HIT!" if is_critical else ""
        lines.append(
            f"{_timestamp(now, timestamp_format)}: {combatant.instance_name} "
            f"{attack.name} attack {index} of {attack.attacks_per_turn}: "
            f"To hit: {die_roll} + {result.total_modifier} (Total Mod) = {result.to_hit}"
            f"{crit_message}; Damage: {damage.formula}"
        )

    logger.info(
        "Attack resolved",
        combatant=combatant.instance_name,
        attack=attack.name,
        rolls=len(sub_attacks),
        criticals=sum(1 for s in sub_attacks if s.is_critical),
    )
    return AttackResolution(
        combatant_name=combatant.instance_name,
        attack_name=attack.name,
        is_saving_throw=False,
        sub_attacks=tuple(sub_attacks),
        log_lines=tuple(lines),
    )


def _resolve_saving_throw_attack(
    combatant: Combatant,
    attack: AttackDefinition,
    roller: DiceRoller,
    now: Clock | None,
    timestamp_format: str,
) -> AttackResolution:
    save_dc = combatant.template.save_dc(attack)
    damage = roller.roll_damage(attack.dice_count, attack.damage_die, 0)
    line = (
        f"{_timestamp(now, timestamp_format)}: {combatant.instance_name} used "
        f"{attack.name} (DC {save_dc} {attack.ability_used.label} save); "
        f"Damage: {damage.formula}"
    )
    logger.info(
        "Saving throw attack resolved",
        combatant=combatant.instance_name,
        attack=attack.name,
        save_dc=save_dc,
        damage=damage.total,
    )
    return AttackResolution(
        combatant_name=combatant.instance_name,
        attack_name=attack.name,
        is_saving_throw=True,
        save_dc=save_dc,
        damage=damage,
        log_lines=(line,),
    )


def resolve_save(
    combatant: Combatant,
    ability: Ability | str,
    *,
    roller: DiceRoller | None = None,
    now: Clock | None = None,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> SaveResolution:
    """Roll an ability save for a combatant.

    Args:
        combatant: The instance making the save.
        ability: Ability being saved with.
        roller: Dice source; defaults to the shared roller.
        now: Clock for the console timestamp.
        timestamp_format: strftime format for the console timestamp.

    Returns:
        SaveResolution with the breakdown and its console line.
    """
    roller = roller or get_default_roller()
    ability = Ability(ability)
    die_roll = roller.roll_d20()
    modifier = combatant.template.modifier(ability)
    total = die_roll + modifier
    line = (
        f"{_timestamp(now, timestamp_format)}: {combatant.instance_name} rolled a "
        f"{ability.label} Save: {die_roll} (1d20) + {modifier} (Mod) = {total}"
    )
    logger.debug(
        "Save rolled",
        combatant=combatant.instance_name,
        ability=ability.value,
        total=total,
    )
    return SaveResolution(
        combatant_name=combatant.instance_name,
        ability=ability,
        die_roll=die_roll,
        modifier=modifier,
        total=total,
        log_line=line,
    )


__all__ = [
    "AttackResolution",
    "SaveResolution",
    "SubAttackResult",
    "resolve_attack",
    "resolve_save",
]
