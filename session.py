"""UI state container: scanned folders, search text and scan errors.

All mutations go through the methods here so every change to preferences
is persisted before the in-memory list is re-sorted.
"""

import logging
from typing import List, Optional

from config import Settings
from errors import ScanError
from preferences import PreferenceStore
from ranking import FolderGroups, filter_folders, group_folders, sort_folders
from scanner import Folder, scan_base_folder

logger = logging.getLogger(__name__)


class LauncherSession:
    def __init__(self, settings: Settings, preferences: PreferenceStore):
        self.settings = settings
        self.preferences = preferences
        self.folders: List[Folder] = []
        self.search_text = ""
        self.scan_error: Optional[str] = None

    def reload(self) -> None:
        """Load preferences, rescan the base folder and rank the result."""
        self.preferences.load()
        try:
            folders = scan_base_folder(self.settings.base_folder, self.preferences.favorites)
        except ScanError as e:
            logger.warning("Scan failed: %s", e)
            self.scan_error = str(e)
            self.folders = []
            return
        self.scan_error = None
        self.folders = self._sorted(folders)

    def _sorted(self, folders: List[Folder]) -> List[Folder]:
        """Rank folders against the current preferences."""
        return sort_folders(folders, self.preferences.favorites, self.preferences.recent)

    def resort(self) -> None:
        """Re-rank the in-memory list after a preference change."""
        self.folders = self._sorted(self.folders)

    def find(self, name: str) -> Optional[Folder]:
        """Scanned folder with this name, or None."""
        for folder in self.folders:
            if folder.name == name:
                return folder
        return None

    def set_search(self, text: str) -> None:
        """Set the live search text used by groups()."""
        self.search_text = text

    def toggle_favorite(self, name: str) -> bool:
        """Persist the toggle, update the record and re-sort. Returns new state."""
        is_favorite = self.preferences.toggle_favorite(name)
        folder = self.find(name)
        if folder is not None:
            folder.is_favorite = is_favorite
        self.resort()
        return is_favorite

    def visible_folders(self) -> List[Folder]:
        """Ranked folders matching the search text."""
        return filter_folders(self.folders, self.search_text)

    def groups(self) -> FolderGroups:
        """Visible folders split into Favorites, Recent and Other."""
        return group_folders(self.visible_folders(), self.preferences.favorites, self.preferences.recent)
