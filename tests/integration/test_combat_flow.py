"""Integration tests for a full mass combat encounter.

Drives an encounter through spawning, attacks, saves, kills, and
mid-fight composition changes.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from mass_combat.engine.encounter import (
    Encounter,
    KillAction,
    MakeSaveAction,
    ReconcileAction,
    SetHpAction,
    UseAttackAction,
)


@pytest.fixture
def encounter(session_store, scripted_roller, fixed_clock: datetime) -> Encounter:
    return Encounter(session_store, roller=scripted_roller, now=lambda: fixed_clock)


def live_names(encounter: Encounter) -> list[str]:
    return [c.instance_name for c in encounter.roster.live]


class TestGoblinAmbush:
    """The three-goblin encounter, start to finish."""

    def test_kill_and_reinforce(self, encounter: Encounter, goblin) -> None:
        encounter.start_new([(goblin, 3)])
        assert live_names(encounter) == ["Goblin 1", "Goblin 2", "Goblin 3"]

        encounter.handle(KillAction("Goblin 2"))
        assert live_names(encounter) == ["Goblin 1", "Goblin 3"]
        assert encounter.total_xp() == 50

        encounter.handle(ReconcileAction(((goblin, 2),)))
        assert live_names(encounter) == ["Goblin 1", "Goblin 3"]

        encounter.handle(ReconcileAction(((goblin, 3),)))
        assert live_names(encounter) == ["Goblin 1", "Goblin 3", "Goblin 4"]
        assert encounter.total_xp() == 50

    def test_wounded_goblin_survives_reconcile(self, encounter: Encounter, goblin, ogre) -> None:
        encounter.start_new([(goblin, 3)])
        encounter.handle(SetHpAction("Goblin 3", 2))

        encounter.handle(ReconcileAction(((goblin, 3), (ogre, 1))))

        assert live_names(encounter) == ["Goblin 1", "Goblin 2", "Goblin 3", "Ogre"]
        assert encounter.roster.get("Goblin 3").current_hp == 2


class TestConsole:
    """Console output across a round of actions."""

    def test_round_of_actions(self, encounter: Encounter, goblin, ogre) -> None:
        encounter.start_new([(goblin, 2), (ogre, 1)])
        encounter.roller.queue(
            20, 5, 6,  # Goblin 1 scimitar: critical, 2d6
            3, 8, 7,  # Ogre greatclub 1 of 2
            14, 2, 2,  # Ogre greatclub 2 of 2
            4, 4, 4,  # Ogre stomp, 3d6
            16,  # Goblin 2 dex save
        )

        encounter.handle(UseAttackAction("Goblin 1", "Scimitar"))
        encounter.handle(UseAttackAction("Ogre", "Greatclub"))
        encounter.handle(UseAttackAction("Ogre", "Stomp"))
        encounter.handle(MakeSaveAction("Goblin 2", "dex"))

        assert encounter.log.lines == [
            "21:15:30: Goblin 1 Scimitar attack 1 of 1: "
            "To hit: 20 + 4 (Total Mod) = 24 -> CRITICAL HIT!; Damage: 5 + 6 + 2 = 13",
            "21:15:30: Ogre Greatclub attack 1 of 2: "
            "To hit: 3 + 6 (Total Mod) = 9; Damage: 8 + 7 + 4 = 19",
            "21:15:30: Ogre Greatclub attack 2 of 2: "
            "To hit: 14 + 6 (Total Mod) = 20; Damage: 2 + 2 + 4 = 8",
            "21:15:30: Ogre used Stomp (DC 13 Con save); Damage: 4 + 4 + 4 = 12",
            "21:15:30: Goblin 2 rolled a Dex Save: 16 (1d20) + 2 (Mod) = 18",
        ]

    def test_console_keeps_last_fifty_lines(self, encounter: Encounter, ogre) -> None:
        encounter.start_new([(ogre, 1)])

        for _ in range(30):
            encounter.handle(UseAttackAction("Ogre", "Greatclub"))

        assert len(encounter.log) == 50
        assert encounter.log.lines[-1].startswith("21:15:30: Ogre Greatclub attack 2 of 2")
        assert encounter.log.lines[0].startswith("21:15:30: Ogre Greatclub attack 1 of 2")

    def test_killed_combatant_cannot_act(self, encounter: Encounter, goblin) -> None:
        encounter.start_new([(goblin, 2)])
        encounter.handle(KillAction("Goblin 1"))

        result = encounter.handle(UseAttackAction("Goblin 1", "Scimitar"))

        assert not result.applied
        assert len(encounter.log) == 0
