"""Tests for the encounter controller and action dispatch."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from mass_combat.core.config import EncounterSettings, Settings, StorageSettings
from mass_combat.engine.encounter import (
    ActionResult,
    Encounter,
    KillAction,
    MakeSaveAction,
    ReconcileAction,
    SetHpAction,
    UseAttackAction,
)
from mass_combat.models import Ability
from mass_combat.storage import SessionStore


@pytest.fixture
def encounter(session_store, scripted_roller, fixed_clock: datetime) -> Encounter:
    return Encounter(session_store, roller=scripted_roller, now=lambda: fixed_clock)


def names(combatants) -> list[str]:
    return [c.instance_name for c in combatants]


class TestLifecycle:
    """Tests for spawning, resuming, and starting encounters."""

    def test_new_encounter_is_empty(self, encounter: Encounter) -> None:
        assert encounter.roster.live == []
        assert encounter.log.capacity == 50

    def test_spawn(self, encounter: Encounter, goblin, ogre) -> None:
        encounter.spawn([(goblin, 2), (ogre, 1)])

        assert names(encounter.roster.live) == ["Goblin 1", "Goblin 2", "Ogre"]

    def test_resume_without_saved_session(self, encounter: Encounter) -> None:
        assert encounter.resume() is False
        assert encounter.roster.live == []

    def test_save_and_resume(self, session_store, goblin) -> None:
        first = Encounter(session_store)
        first.spawn([(goblin, 3)])
        first.kill("Goblin 2")
        first.set_hp("Goblin 3", 1)

        assert first.save_session() is True

        second = Encounter(session_store)
        assert second.resume() is True
        assert names(second.roster.live) == ["Goblin 1", "Goblin 3"]
        assert second.roster.get("Goblin 3").current_hp == 1
        assert names(second.roster.killed) == ["Goblin 2"]
        assert second.total_xp() == 50
        assert not session_store.exists()

    def test_start_new_discards_saved_session(self, session_store, goblin, ogre) -> None:
        old = Encounter(session_store)
        old.spawn([(ogre, 1)])
        old.save_session()

        fresh = Encounter(session_store)
        fresh.start_new([(goblin, 1)])

        assert names(fresh.roster.live) == ["Goblin"]
        assert not session_store.exists()
        assert fresh.resume() is False

    def test_save_failure_returns_false(self, tmp_path: Path, goblin) -> None:
        """Test a write failure is reported without touching the roster."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        encounter = Encounter(SessionStore(blocker / "active_simulation.json"))
        encounter.spawn([(goblin, 2)])

        assert encounter.save_session() is False
        assert len(encounter.roster) == 2

    def test_from_settings_uses_storage_paths(self, tmp_path: Path) -> None:
        settings = Settings(
            storage=StorageSettings(data_dir=tmp_path / "data"),
            encounter=EncounterSettings(log_capacity=5),
        )

        encounter = Encounter.from_settings(settings)

        assert encounter.session_store.path == tmp_path / "data" / "active_simulation.json"
        assert encounter.log.capacity == 5

    def test_settings_configure_hp_clamping(self, session_store, goblin) -> None:
        encounter = Encounter(
            session_store,
            settings=EncounterSettings(hp_floor=0, clamp_hp_to_max=True),
        )
        encounter.spawn([(goblin, 1)])

        encounter.set_hp("Goblin", -3)

        assert encounter.roster.get("Goblin").current_hp == 0


class TestCombatActions:
    """Tests for attacks and saves routed through the encounter."""

    def test_attack_appends_to_log(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 1)])
        encounter.roller.queue(15, 3)

        resolution = encounter.resolve_attack("Goblin", "Scimitar")

        assert resolution is not None
        assert encounter.log_tail(1) == [
            "21:15:30: Goblin Scimitar attack 1 of 1: "
            "To hit: 15 + 4 (Total Mod) = 19; Damage: 3 + 2 = 5"
        ]

    def test_unknown_attack_or_combatant(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 1)])

        assert encounter.resolve_attack("Goblin", "Bite") is None
        assert encounter.resolve_attack("Kobold", "Scimitar") is None
        assert encounter.resolve_save("Kobold", Ability.DEX) is None
        assert len(encounter.log) == 0

    def test_save_appends_to_log(self, encounter: Encounter, ogre) -> None:
        encounter.spawn([(ogre, 1)])
        encounter.roller.queue(9)

        save = encounter.resolve_save("Ogre", "con")

        assert save is not None
        assert save.total == 12
        assert encounter.log_tail(5) == [
            "21:15:30: Ogre rolled a Con Save: 9 (1d20) + 3 (Mod) = 12"
        ]

    def test_log_is_bounded(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 1)])

        for _ in range(60):
            encounter.resolve_save("Goblin", Ability.STR)

        assert len(encounter.log) == 50


class TestHandle:
    """Tests for Encounter.handle dispatch."""

    def test_kill(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 2)])

        result = encounter.handle(KillAction("Goblin 1"))

        assert isinstance(result, ActionResult)
        assert result.applied
        assert result.log_lines == []
        assert names(encounter.roster.killed) == ["Goblin 1"]

    def test_kill_unknown_is_not_applied(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 2)])

        assert not encounter.handle(KillAction("Goblin 7")).applied

    def test_set_hp(self, encounter: Encounter, goblin) -> None:
        encounter.spawn([(goblin, 2)])

        result = encounter.handle(SetHpAction("Goblin 2", 3))

        assert result.applied
        assert encounter.roster.get("Goblin 2").current_hp == 3

    def test_use_attack(self, encounter: Encounter, ogre) -> None:
        encounter.spawn([(ogre, 1)])

        result = encounter.handle(UseAttackAction("Ogre", "Greatclub"))

        assert result.applied
        assert len(result.log_lines) == 2
        assert encounter.log.lines == result.log_lines

    def test_make_save(self, encounter: Encounter, ogre) -> None:
        encounter.spawn([(ogre, 1)])

        result = encounter.handle(MakeSaveAction("Ogre", Ability.CHA))

        assert result.applied
        assert result.log_lines[0].endswith("1 (1d20) + -2 (Mod) = -1")

    def test_reconcile(self, encounter: Encounter, goblin, ogre) -> None:
        encounter.spawn([(goblin, 2)])

        result = encounter.handle(ReconcileAction(((goblin, 1), (ogre, 1))))

        assert result.applied
        assert names(encounter.roster.live) == ["Goblin 1", "Ogre"]

    def test_unsupported_action(self, encounter: Encounter) -> None:
        with pytest.raises(TypeError):
            encounter.handle("kill everything")  # type: ignore[arg-type]
