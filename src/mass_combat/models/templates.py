"""Pydantic V2 schemas for monster templates.

Templates are immutable reference data. The template store persists them as
one JSON document per monster; documents written by the original desktop
application use different keys (``exp``, ``pb``, ``attack_name``,
``dice_used: "d6"`` ...) and are accepted through validation aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mass_combat.core.constants import SAVE_DC_BASE
from mass_combat.models.enums import Ability


class AttackDefinition(BaseModel):
    """A single attack a monster can make.

    Attributes:
        name: Display name of the attack.
        ability_used: Ability whose modifier applies to hit and damage.
        damage_die: Sides of the damage die (6 for a d6).
        dice_count: Number of damage dice rolled.
        attacks_per_turn: Attack rolls made per use.
        is_saving_throw: Whether targets save against a DC instead of
            the monster rolling to hit.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("name", "attack_name"),
        description="Attack name",
    )
    ability_used: Ability = Field(default=Ability.STR, description="Ability used")
    damage_die: int = Field(
        ge=1,
        validation_alias=AliasChoices("damage_die", "dice_used"),
        description="Damage die size",
    )
    dice_count: int = Field(
        default=1,
        ge=0,
        validation_alias=AliasChoices("dice_count", "num_dice"),
        description="Damage dice rolled",
    )
    attacks_per_turn: int = Field(
        default=1,
        ge=0,
        validation_alias=AliasChoices("attacks_per_turn", "num_attacks"),
        description="Attack rolls per use",
    )
    is_saving_throw: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_saving_throw", "saving_throw"),
        description="Targets save instead of being attacked",
    )

    @field_validator("damage_die", mode="before")
    @classmethod
    def parse_die_notation(cls, value: Any) -> Any:
        """Accept ``"d6"`` style notation as well as a bare size."""
        if isinstance(value, str):
            return value.strip().lstrip("dD")
        return value

    @property
    def dice_notation(self) -> str:
        """Damage dice as written on a stat block, e.g. ``"2d6"``."""
        return f"{self.dice_count}d{self.damage_die}"


class MonsterTemplate(BaseModel):
    """Reusable definition of a monster's stats and attacks.

    Attributes:
        name: Unique template name, also the store's file stem.
        hp: Hit points each spawned instance starts with.
        ac: Armor class (reported, never compared by the engine).
        proficiency_bonus: Added to attack rolls and save DCs.
        str_mod: Strength modifier.
        dex_mod: Dexterity modifier.
        con_mod: Constitution modifier.
        int_mod: Intelligence modifier.
        wis_mod: Wisdom modifier.
        cha_mod: Charisma modifier.
        xp: Experience awarded when an instance is killed.
        attacks: Ordered attack definitions.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    name: str = Field(min_length=1, max_length=200, description="Template name")
    hp: int = Field(description="Starting hit points")
    ac: int = Field(default=10, description="Armor class")
    proficiency_bonus: int = Field(
        default=2,
        validation_alias=AliasChoices("proficiency_bonus", "pb"),
        description="Proficiency bonus",
    )
    str_mod: int = Field(default=0, validation_alias=AliasChoices("str_mod", "str"))
    dex_mod: int = Field(default=0, validation_alias=AliasChoices("dex_mod", "dex"))
    con_mod: int = Field(default=0, validation_alias=AliasChoices("con_mod", "con"))
    int_mod: int = Field(default=0, validation_alias=AliasChoices("int_mod", "int"))
    wis_mod: int = Field(default=0, validation_alias=AliasChoices("wis_mod", "wis"))
    cha_mod: int = Field(default=0, validation_alias=AliasChoices("cha_mod", "cha"))
    xp: int = Field(
        default=0,
        validation_alias=AliasChoices("xp", "exp"),
        description="Experience for a kill",
    )
    attacks: tuple[AttackDefinition, ...] = Field(
        default=(),
        description="Attack definitions",
    )

    @field_validator("name", mode="after")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Template names double as file names in the store."""
        if not value.strip():
            raise ValueError("Template name must not be blank")
        if "/" in value or "\\" in value:
            raise ValueError("Template name must not contain path separators")
        return value

    def modifier(self, ability: Ability | str) -> int:
        """Return the modifier for an ability.

        Args:
            ability: Ability enum member or short name (``"dex"``).

        Returns:
            The template's modifier for that ability.
        """
        return getattr(self, f"{Ability(ability).value}_mod")

    def attack_bonus(self, attack: AttackDefinition) -> int:
        """Total to-hit modifier (ability modifier plus proficiency)."""
        return self.modifier(attack.ability_used) + self.proficiency_bonus

    def save_dc(self, attack: AttackDefinition) -> int:
        """DC targets roll against for a saving-throw attack."""
        return SAVE_DC_BASE + self.attack_bonus(attack)

    def get_attack(self, attack_name: str) -> AttackDefinition | None:
        """First attack with the given name, if any."""
        for attack in self.attacks:
            if attack.name == attack_name:
                return attack
        return None

    def with_attack(self, attack: AttackDefinition) -> MonsterTemplate:
        """Copy of this template with an attack appended."""
        return self.model_copy(update={"attacks": (*self.attacks, attack)})

    def without_attack(self, attack_name: str) -> MonsterTemplate:
        """Copy of this template with every attack of that name removed."""
        kept = tuple(a for a in self.attacks if a.name != attack_name)
        return self.model_copy(update={"attacks": kept})


__all__ = [
    "AttackDefinition",
    "MonsterTemplate",
]
