"""Scan the base folder for projects and classify each one."""

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from errors import ScanError


class ProjectType(Enum):
    DDEV = "ddev"
    ASTRO = "astro"
    UNKNOWN = "unknown"


@dataclass
class Folder:
    name: str
    path: Path
    project_type: ProjectType = ProjectType.UNKNOWN
    is_favorite: bool = False


def _has_astro_dependency(manifest) -> bool:
    if not isinstance(manifest, dict):
        return False
    for key in ("dependencies", "devDependencies"):
        deps = manifest.get(key)
        if isinstance(deps, dict) and "astro" in deps:
            return True
    return False


def detect_project_type(folder_path: str | Path) -> ProjectType:
    """Classify a folder by its signature files. First match wins."""
    folder_path = Path(folder_path)

    if (folder_path / ".ddev" / "config.yaml").exists():
        return ProjectType.DDEV

    package_json = folder_path / "package.json"
    if package_json.exists():
        try:
            manifest = json.loads(package_json.read_text(encoding="utf-8-sig"))
            if _has_astro_dependency(manifest):
                return ProjectType.ASTRO
        except (json.JSONDecodeError, UnicodeDecodeError, OSError):
            # Unreadable manifest counts as no signal
            pass

    return ProjectType.UNKNOWN


def scan_base_folder(base: str | Path, favorites: Iterable[str] = ()) -> List[Folder]:
    """List and classify the immediate subdirectories of base.

    Hidden entries, plain files and symlinks are skipped. Order is unspecified.
    """
    base = Path(base)
    favorites = set(favorites)

    try:
        with os.scandir(base) as it:
            entries = list(it)
    except OSError as e:
        raise ScanError(f"Cannot read {base}: {e.strerror or e}") from e

    folders = []
    for entry in entries:
        if entry.name.startswith('.'):
            continue
        try:
            if not entry.is_dir(follow_symlinks=False):
                continue
        except OSError:
            continue
        path = Path(entry.path).absolute()
        folders.append(Folder(
            name=entry.name,
            path=path,
            project_type=detect_project_type(path),
            is_favorite=entry.name in favorites,
        ))
    return folders
