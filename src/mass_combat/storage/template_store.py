"""File-backed monster template store.

Each template lives in its own ``<name>.json`` document under the store
directory (``~/.config/MonsterMan/Monsters`` by default). Documents that
fail to parse are skipped when listing, so one bad file never hides the
rest of the bestiary.

The encounter core only needs the read side, captured by the
TemplateSource protocol.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError as PydanticValidationError

from mass_combat.core.exceptions import (
    AttackNotFoundError,
    TemplateNotFoundError,
    TemplateStoreError,
    ValidationError,
)
from mass_combat.core.logging import get_logger
from mass_combat.models.templates import AttackDefinition, MonsterTemplate


logger = get_logger(__name__)


class TemplateSource(Protocol):
    """Read-only access to monster templates."""

    def list_all(self) -> list[MonsterTemplate]:
        """All templates sorted by name."""
        ...

    def get(self, name: str) -> MonsterTemplate | None:
        """A template by name, or None."""
        ...


class TemplateStore:
    """JSON-file-per-template storage.

    Example:
        >>> store = TemplateStore(tmp_path / "Monsters")
        >>> store.save(goblin)
        >>> store.get("Goblin").hp
        7
    """

    def __init__(self, root: str | Path) -> None:
        """Initialize the store.

        Args:
            root: Directory holding the template documents.
        """
        self.root = Path(root)

    def _path_for(self, name: str) -> Path | None:
        if not name or "/" in name or "\\" in name:
            return None
        return self.root / f"{name}.json"

    def has_templates(self) -> bool:
        """Whether the store directory exists (false on first run)."""
        return self.root.is_dir()

    # =========================================================================
    # Read
    # =========================================================================

    def _read(self, path: Path) -> MonsterTemplate | None:
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Template unreadable", path=str(path), error=str(exc))
            return None
        try:
            return MonsterTemplate.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("Template invalid", path=str(path), errors=exc.error_count())
            return None

    def get(self, name: str) -> MonsterTemplate | None:
        """Load a template by name.

        Returns:
            The template, or None if it is missing or unparseable.
        """
        path = self._path_for(name)
        if path is None or not path.is_file():
            return None
        return self._read(path)

    def list_all(self) -> list[MonsterTemplate]:
        """Load every parseable template, sorted by name."""
        if not self.root.is_dir():
            return []
        templates = []
        for path in sorted(self.root.glob("*.json")):
            template = self._read(path)
            if template is not None:
                templates.append(template)
        templates.sort(key=lambda t: t.name)
        return templates

    # =========================================================================
    # Write
    # =========================================================================

    def save(self, template: MonsterTemplate) -> Path:
        """Create or overwrite a template.

        Returns:
            Path of the written document.

        Raises:
            TemplateStoreError: If the document cannot be written.
        """
        path = self._path_for(template.name)
        if path is None:
            raise TemplateStoreError(
                f"Invalid template name: {template.name!r}",
                path=self.root,
            )
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_text(template.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise TemplateStoreError(f"Failed to save template: {exc}", path=path) from exc

        logger.info("Template saved", template=template.name, path=str(path))
        return path

    def create(self, data: Mapping[str, Any]) -> MonsterTemplate:
        """Validate operator-entered template data and save it.

        Args:
            data: Raw field values, e.g. from a template editor form.

        Returns:
            The saved template.

        Raises:
            ValidationError: If a field is missing or has an invalid value.
            TemplateStoreError: If the document cannot be written.
        """
        try:
            template = MonsterTemplate.model_validate(dict(data))
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"]) or None
            raise ValidationError(
                f"Invalid template: {first['msg']}",
                field_name=field_name,
                invalid_value=first.get("input"),
            ) from exc
        self.save(template)
        return template

    def delete(self, name: str) -> None:
        """Remove a template.

        Raises:
            TemplateNotFoundError: If no such template exists.
            TemplateStoreError: If the document cannot be removed.
        """
        path = self._path_for(name)
        if path is None or not path.is_file():
            raise TemplateNotFoundError("Monster not found", template_name=name, path=path)
        try:
            path.unlink()
        except OSError as exc:
            raise TemplateStoreError(f"Failed to delete template: {exc}", path=path) from exc

        logger.info("Template deleted", template=name)

    def _require(self, name: str) -> MonsterTemplate:
        template = self.get(name)
        if template is None:
            raise TemplateNotFoundError(
                "Monster not found",
                template_name=name,
                path=self._path_for(name),
            )
        return template

    def add_attack(self, name: str, attack: AttackDefinition) -> MonsterTemplate:
        """Append an attack to a stored template.

        Returns:
            The updated template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        updated = self._require(name).with_attack(attack)
        self.save(updated)
        return updated

    def remove_attack(self, name: str, attack_name: str) -> MonsterTemplate:
        """Remove every attack with the given name from a stored template.

        Returns:
            The updated template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            AttackNotFoundError: If the template has no such attack.
        """
        template = self._require(name)
        updated = template.without_attack(attack_name)
        if len(updated.attacks) == len(template.attacks):
            raise AttackNotFoundError(
                "Attack not found",
                template_name=name,
                attack_name=attack_name,
            )
        self.save(updated)
        return updated


def selections_from_counts(
    source: TemplateSource,
    counts: Mapping[str, int],
) -> list[tuple[MonsterTemplate, int]]:
    """Turn a ``name -> count`` mapping into an ordered selection.

    Templates come out in store order (sorted by name). Unknown names and
    non-positive counts are skipped.
    """
    templates = source.list_all()
    selections: list[tuple[MonsterTemplate, int]] = []
    for template in templates:
        count = counts.get(template.name, 0)
        if count > 0:
            selections.append((template, count))
    unknown = sorted(set(counts) - {t.name for t in templates})
    if unknown:
        logger.warning("Unknown templates in selection", templates=unknown)
    return selections


__all__ = [
    "TemplateSource",
    "TemplateStore",
    "selections_from_counts",
]
