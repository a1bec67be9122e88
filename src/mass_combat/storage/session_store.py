"""Saved-encounter persistence.

At most one encounter is saved at a time, as a single JSON document at a
well-known per-user path (``~/.config/MonsterMan/active_simulation.json`` by
default). The file's presence is the only resume signal.

Load-once:
    try_load() deletes the file as part of reading it, so the same encounter
    can never be resumed twice. Any I/O or parse failure is reported as "no
    session" rather than raised.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from mass_combat.core.exceptions import SessionPersistenceError
from mass_combat.core.logging import get_logger
from mass_combat.models.combat import Session


logger = get_logger(__name__)


class SessionStore:
    """Reads and writes the single saved encounter.

    Example:
        >>> store = SessionStore(tmp_path / "active_simulation.json")
        >>> store.save(roster.snapshot())
        >>> session = store.try_load()   # file is gone afterwards
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the session file.
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Whether a saved encounter is waiting to be resumed."""
        return self.path.is_file()

    def save(self, session: Session) -> None:
        """Write a session, replacing any previous one.

        Args:
            session: Snapshot to persist.

        Raises:
            SessionPersistenceError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(session.to_json(), encoding="utf-8")
        except OSError as exc:
            raise SessionPersistenceError(
                f"Failed to save session: {exc}",
                path=self.path,
            ) from exc

        logger.info(
            "Session saved",
            path=str(self.path),
            combatants=len(session.combatants),
            killed=len(session.killed_monsters),
        )

    def try_load(self) -> Session | None:
        """Read and consume the saved session.

        Returns:
            The session, or None if there is none or it could not be read,
            parsed, or removed.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Session file unreadable", path=str(self.path), error=str(exc))
            return None

        try:
            session = Session.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning(
                "Session file invalid",
                path=str(self.path),
                errors=exc.error_count(),
            )
            return None

        try:
            self.path.unlink()
        except OSError as exc:
            logger.warning("Session file could not be consumed", path=str(self.path), error=str(exc))
            return None

        logger.info(
            "Session loaded",
            path=str(self.path),
            combatants=len(session.combatants),
            killed=len(session.killed_monsters),
        )
        return session

    def discard(self) -> bool:
        """Delete the saved session if present.

        Returns:
            True if a file was removed.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning("Session file could not be discarded", path=str(self.path), error=str(exc))
            return False

        logger.info("Session discarded", path=str(self.path))
        return True


__all__ = [
    "SessionStore",
]
