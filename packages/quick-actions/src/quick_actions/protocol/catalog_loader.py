"""YAML action catalog loader with fail-fast validation."""
from __future__ import annotations

import logging
from pathlib import Path

import yaml

from quick_actions.config import EngineSettings
from quick_actions.protocol.types import ActionCategory, QuickAction

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "default_actions.yaml"

_VALID_CATEGORIES = {c.value for c in ActionCategory}
_REQUIRED_KEYS = ("id", "label", "icon")
_OPTIONAL_STR_KEYS = ("description", "action", "color", "keyboard")


class CatalogValidationError(Exception):
    pass


class CatalogLoader:
    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    def load(self) -> list[QuickAction]:
        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        raw_actions = data.get("actions") if isinstance(data, dict) else None
        if not isinstance(raw_actions, list):
            raise CatalogValidationError(f"{self._path}: expected a top-level 'actions' list")

        actions: list[QuickAction] = []
        seen: set[str] = set()
        for position, raw in enumerate(raw_actions, start=1):
            action = self._build(raw, position)
            if action.id in seen:
                raise CatalogValidationError(f"{self._path}: duplicate action id '{action.id}'")
            seen.add(action.id)
            actions.append(action)

        logger.info("Loaded %d quick actions from %s", len(actions), self._path)
        return actions

    def _build(self, raw: object, position: int) -> QuickAction:
        if not isinstance(raw, dict):
            raise CatalogValidationError(f"{self._path}: entry {position} is not a mapping")

        for key in _REQUIRED_KEYS:
            value = raw.get(key)
            if not isinstance(value, str) or not value.strip():
                raise CatalogValidationError(f"{self._path}: entry {position} missing '{key}'")

        aid = raw["id"]
        category = raw.get("category", ActionCategory.OTHER.value)
        if category not in _VALID_CATEGORIES:
            raise CatalogValidationError(f"{self._path}: {aid}: invalid category '{category}'")

        tags = raw.get("tags") or []
        aliases = raw.get("voice_aliases") or []
        if not isinstance(tags, list) or not isinstance(aliases, list):
            raise CatalogValidationError(f"{self._path}: {aid}: 'tags' and 'voice_aliases' must be lists")

        # an empty YAML value counts as absent
        is_emergency = raw.get("is_emergency")
        if is_emergency is None:
            is_emergency = False
        elif not isinstance(is_emergency, bool):
            raise CatalogValidationError(f"{self._path}: {aid}: 'is_emergency' must be true or false")

        for key in _OPTIONAL_STR_KEYS:
            value = raw.get(key)
            if value is not None and not isinstance(value, str):
                raise CatalogValidationError(f"{self._path}: {aid}: '{key}' must be a string")

        return QuickAction(
            id=aid,
            label=raw["label"],
            icon=raw["icon"],
            category=ActionCategory(category),
            is_emergency=is_emergency,
            description=raw.get("description") or "",
            action=raw.get("action") or "",
            color=raw.get("color"),
            keyboard=raw.get("keyboard"),
            tags=tuple(str(t) for t in tags),
            voice_aliases=tuple(str(a) for a in aliases),
        )


def load_default_catalog() -> list[QuickAction]:
    return CatalogLoader(DEFAULT_CATALOG_PATH).load()


def load_catalog(path: Path | str | None = None) -> list[QuickAction]:
    """Load *path*, or the packaged default catalog when it is ``None``."""
    if path is None:
        return load_default_catalog()
    return CatalogLoader(path).load()


def load_configured_catalog(settings: EngineSettings | None = None) -> list[QuickAction]:
    settings = settings or EngineSettings()
    return load_catalog(settings.catalog_path)
