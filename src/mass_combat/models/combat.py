"""Pydantic V2 schemas for encounter state.

A Combatant is one spawned instance of a MonsterTemplate. A Session is the
persistable snapshot of a roster, written to a single JSON file so an
encounter can be resumed after the application restarts.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from mass_combat.core.constants import SESSION_SCHEMA_VERSION
from mass_combat.models.templates import MonsterTemplate


class Combatant(BaseModel):
    """A live (or killed) monster instance in the encounter.

    Attributes:
        instance_name: Display name, unique among live combatants.
        template: Snapshot of the template taken at spawn time. Serialized
            under the ``monster_template`` key.
        current_hp: Current hit points, edited by the operator.
        max_hp: Hit points at spawn; never changed afterwards.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
        populate_by_name=True,
    )

    instance_name: str = Field(min_length=1, description="Instance display name")
    template: MonsterTemplate = Field(
        validation_alias=AliasChoices("monster_template", "template"),
        serialization_alias="monster_template",
        description="Template snapshot",
    )
    current_hp: int = Field(description="Current HP")
    max_hp: int = Field(description="HP at spawn")

    @classmethod
    def spawn(cls, template: MonsterTemplate, instance_name: str) -> Combatant:
        """Create a fresh instance at full health.

        Args:
            template: Template to snapshot.
            instance_name: Name assigned by the roster's naming rule.

        Returns:
            A new Combatant with ``current_hp == max_hp == template.hp``.
        """
        return cls(
            instance_name=instance_name,
            template=template.model_copy(deep=True),
            current_hp=template.hp,
            max_hp=template.hp,
        )

    @property
    def ordinal(self) -> int | None:
        """Numeric suffix of the instance name, or None for a bare name."""
        return parse_ordinal(self.instance_name, self.template.name)


class Session(BaseModel):
    """Persisted snapshot of a roster.

    Attributes:
        version: Format version; files without one are treated as version 1.
        combatants: Live combatants in roster order.
        killed_monsters: Killed combatants in kill order.
    """

    model_config = ConfigDict(extra="ignore")

    version: int = Field(default=SESSION_SCHEMA_VERSION, description="Format version")
    combatants: list[Combatant] = Field(default_factory=list, description="Live combatants")
    killed_monsters: list[Combatant] = Field(
        default_factory=list,
        description="Killed combatants",
    )

    @model_validator(mode="after")
    def check_version(self) -> Session:
        """Reject files written by a newer, incompatible format."""
        if not 1 <= self.version <= SESSION_SCHEMA_VERSION:
            raise ValueError(f"Unsupported session version {self.version}")
        return self

    def to_json(self) -> str:
        """Serialize with the on-disk key names."""
        return self.model_dump_json(by_alias=True, indent=2)


def parse_ordinal(instance_name: str, template_name: str) -> int | None:
    """Extract the ordinal from ``"<template name> <n>"``.

    Args:
        instance_name: Name of a spawned instance.
        template_name: Name of the template it was spawned from.

    Returns:
        The positive ordinal, or None when the name carries no suffix.
    """
    prefix = f"{template_name} "
    if not instance_name.startswith(prefix):
        return None
    suffix = instance_name[len(prefix):]
    if suffix.isdigit():
        return int(suffix)
    return None


__all__ = [
    "Combatant",
    "Session",
    "parse_ordinal",
]
