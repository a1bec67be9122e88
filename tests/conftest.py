"""Pytest configuration and shared fixtures.

This module provides common fixtures for the mass combat test suite:
sample templates, a scripted dice roller, a fixed clock, and storage
locations under ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from mass_combat.engine.dice import DiceRoller
from mass_combat.models import Ability, AttackDefinition, MonsterTemplate
from mass_combat.storage import SessionStore, TemplateStore


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedRoller(DiceRoller):
    """DiceRoller that returns queued values instead of random ones.

    Each call to ``roll_die`` pops the next value. When the script runs
    out, dice show 1.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        super().__init__()
        self.values = list(values)
        self.requests: list[int] = []

    def queue(self, *values: int) -> None:
        self.values.extend(values)

    def roll_die(self, die_size: int) -> int:
        self.requests.append(die_size)
        if self.values:
            return self.values.pop(0)
        return 1


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from mass_combat.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the configured data directory at a temporary location."""
    path = tmp_path / "MonsterMan"
    monkeypatch.setenv("MASS_COMBAT_DATA_DIR", str(path))
    return path


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def scimitar() -> AttackDefinition:
    return AttackDefinition(
        name="Scimitar",
        ability_used=Ability.DEX,
        damage_die=6,
        dice_count=1,
        attacks_per_turn=1,
    )


@pytest.fixture
def goblin(scimitar: AttackDefinition) -> MonsterTemplate:
    """Provide a Goblin template (7 HP, +2 DEX, 50 XP)."""
    return MonsterTemplate(
        name="Goblin",
        hp=7,
        ac=15,
        proficiency_bonus=2,
        str_mod=-1,
        dex_mod=2,
        con_mod=0,
        int_mod=0,
        wis_mod=-1,
        cha_mod=-1,
        xp=50,
        attacks=(scimitar,),
    )


@pytest.fixture
def ogre() -> MonsterTemplate:
    """Provide an Ogre with a multiattack and a saving-throw attack."""
    return MonsterTemplate(
        name="Ogre",
        hp=59,
        ac=11,
        proficiency_bonus=2,
        str_mod=4,
        dex_mod=-1,
        con_mod=3,
        int_mod=-3,
        wis_mod=-2,
        cha_mod=-2,
        xp=450,
        attacks=(
            AttackDefinition(
                name="Greatclub",
                ability_used=Ability.STR,
                damage_die=8,
                dice_count=2,
                attacks_per_turn=2,
            ),
            AttackDefinition(
                name="Stomp",
                ability_used=Ability.CON,
                damage_die=6,
                dice_count=3,
                attacks_per_turn=1,
                is_saving_throw=True,
            ),
        ),
    )


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    return DiceRoller()


@pytest.fixture
def scripted_roller() -> ScriptedRoller:
    return ScriptedRoller()


@pytest.fixture
def fixed_clock() -> datetime:
    return datetime(2024, 5, 4, 21, 15, 30)


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def session_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "active_simulation.json")


@pytest.fixture
def template_store(tmp_path: Path) -> TemplateStore:
    return TemplateStore(tmp_path / "Monsters")
