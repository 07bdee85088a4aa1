"""Launcher settings: base folder and the external applications to drive."""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_FILE = os.path.expanduser("~/.config/project-launcher/config.json")
PREFS_FILE = os.path.expanduser("~/.cache/project-launcher/preferences.json")
MAX_RECENT = 10


@dataclass
class Settings:
    base_folder: Path = Path.home() / "Sites"
    editor: str = "cursor"
    terminal_app: str = "iTerm"
    browser_app: str = "Google Chrome"
    prefs_file: Path = Path(PREFS_FILE)
    max_recent: int = MAX_RECENT

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Build settings from a config mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("base_folder", "prefs_file", "editor", "terminal_app", "browser_app"):
            if key in values and (not isinstance(values[key], str) or not values[key]):
                raise ValueError(f"{key} must be a non-empty string, got {values[key]!r}")
        for key in ("base_folder", "prefs_file"):
            if key in values:
                values[key] = Path(os.path.expanduser(str(values[key])))
        if "max_recent" in values:
            values["max_recent"] = int(values["max_recent"])
        return cls(**values)


def load_settings(path: Optional[str] = None, base_folder: Optional[str] = None) -> Settings:
    """Load settings from the config file, then apply env and argv overrides."""
    config_path = Path(path or CONFIG_FILE)
    data = {}
    try:
        if config_path.exists():
            data = json.loads(config_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                logger.warning("Ignoring %s: expected a JSON object", config_path)
                data = {}
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        data = {}

    try:
        settings = Settings.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning("Invalid value in %s: %s", config_path, e)
        settings = Settings()

    # Environment wins over the file, argv wins over both
    env_base = os.environ.get("PROJECT_LAUNCHER_BASE")
    if env_base:
        settings.base_folder = Path(os.path.expanduser(env_base))
    env_editor = os.environ.get("PROJECT_LAUNCHER_EDITOR")
    if env_editor:
        settings.editor = env_editor
    if base_folder:
        settings.base_folder = Path(os.path.expanduser(base_folder))

    return settings
