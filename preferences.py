"""Favorites and recent projects persistence."""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional

from errors import PreferenceError

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"
RECENT_PROJECTS_KEY = "recent_projects"
MAX_RECENT = 10


class JsonFileStore:
    """String key-value store backed by a single JSON file.

    The whole file is rewritten on every set.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
                logger.warning("Ignoring %s: expected a JSON object", self.path)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable preferences %s: %s", self.path, e)
        return {}

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            os.makedirs(self.path.parent, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise PreferenceError(f"Cannot write {self.path}: {e}") from e


def _decode_names(raw: Optional[str]) -> List[str]:
    """Decode a JSON array of names. Anything malformed loads as empty."""
    if not raw:
        return []
    try:
        names = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding malformed preference value: %r", raw)
        return []
    if not isinstance(names, list):
        return []
    result = []
    for name in names:
        if isinstance(name, str) and name not in result:
            result.append(name)
    return result


class PreferenceStore:
    """Favorite and recent folder names, persisted on every change."""

    def __init__(self, store, max_recent: int = MAX_RECENT):
        self.store = store
        self.max_recent = max_recent
        self._favorites: List[str] = []
        self._recent: List[str] = []
        self._lock = threading.Lock()

    def load(self) -> None:
        with self._lock:
            self._favorites = _decode_names(self.store.get(FAVORITES_KEY))
            self._recent = _decode_names(self.store.get(RECENT_PROJECTS_KEY))[:self.max_recent]

    @property
    def favorites(self) -> List[str]:
        return list(self._favorites)

    @property
    def recent(self) -> List[str]:
        return list(self._recent)

    def is_favorite(self, name: str) -> bool:
        return name in self._favorites

    def toggle_favorite(self, name: str) -> bool:
        """Add or remove name from favorites. Returns the new membership."""
        with self._lock:
            if name in self._favorites:
                favorites = [f for f in self._favorites if f != name]
            else:
                favorites = self._favorites + [name]
            self.store.set(FAVORITES_KEY, json.dumps(favorites))
            self._favorites = favorites
            return name in favorites

    def add_recent(self, name: str) -> List[str]:
        """Move name to the front of the recent list and save."""
        with self._lock:
            recent = [name] + [r for r in self._recent if r != name]
            recent = recent[:self.max_recent]
            self.store.set(RECENT_PROJECTS_KEY, json.dumps(recent))
            self._recent = recent
            return list(recent)
