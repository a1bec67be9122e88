"""Tests for structured logging setup."""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from mass_combat.core.config import Settings, StorageSettings
from mass_combat.core.logging import (
    configure_from_settings,
    configure_logging,
    get_logger,
)
from mass_combat.engine.encounter import Encounter


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()


def last_record(capfd: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capfd.readouterr().out.strip().splitlines()[-1])


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output_includes_app_context(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="INFO", json_format=True, app_version="9.9")

        get_logger("mass_combat.test").info("Roster spawned", combatants=3)

        record = last_record(capfd)
        assert record["event"] == "Roster spawned"
        assert record["combatants"] == 3
        assert record["app"] == "mass_combat"
        assert record["version"] == "9.9"
        assert record["level"] == "info"

    def test_level_filters_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="WARNING", json_format=True)

        get_logger("mass_combat.test").debug("Damage rolled")

        assert "Damage rolled" not in capfd.readouterr().out

    def test_unknown_level_falls_back_to_info(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(level="CHATTY", json_format=True)
        logger = get_logger("mass_combat.test")

        logger.debug("Damage rolled")
        logger.info("Combatant killed")

        out = capfd.readouterr().out
        assert "Damage rolled" not in out
        assert "Combatant killed" in out


class TestConfigureFromSettings:
    """Tests for settings-driven logging."""

    def test_applies_logging_settings(self, capfd: pytest.CaptureFixture[str]) -> None:
        settings = Settings(json_logs=True, log_level="WARNING", app_name="Table 3")

        applied = configure_from_settings(settings)
        logger = get_logger("mass_combat.test")
        logger.info("Session saved")
        logger.warning("Session file invalid")

        assert applied is settings
        record = last_record(capfd)
        assert record["event"] == "Session file invalid"
        assert record["app"] == "Table 3"
        assert record["version"] == settings.app_version

    def test_debug_forces_debug_level(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_from_settings(Settings(json_logs=True, log_level="ERROR", debug=True))

        get_logger("mass_combat.test").debug("Template reconciled")

        assert last_record(capfd)["event"] == "Template reconciled"

    def test_encounter_from_settings_configures_logging(
        self,
        tmp_path: Path,
        capfd: pytest.CaptureFixture[str],
    ) -> None:
        settings = Settings(
            json_logs=True,
            storage=StorageSettings(data_dir=tmp_path),
        )

        Encounter.from_settings(settings)
        get_logger("mass_combat.test").info("Roster spawned")

        assert last_record(capfd)["app"] == settings.app_name
