"""Order, filter and group scanned folders.

Everything here is stateless: favorites and recent names are passed in on
every call so a re-sort after a toggle or an open always sees current state.
"""

import locale
from dataclasses import dataclass, field
from typing import List, Sequence

from scanner import Folder

# Non-favorite recents below this index get a "recently opened" marker
RECENT_HIGHLIGHT = 5


def name_key(name: str):
    """Locale-aware sort key: case-insensitive first, lowercase before uppercase on ties."""
    return (locale.strxfrm(name.casefold()), name.swapcase())


def sort_folders(folders: Sequence[Folder], favorites: Sequence[str], recent: Sequence[str]) -> List[Folder]:
    """Favorites first, then recents by recency, then by name."""
    favorite_set = set(favorites)
    recent_index = {}
    for i, name in enumerate(recent):
        recent_index.setdefault(name, i)

    def key(folder: Folder):
        is_fav = folder.name in favorite_set
        idx = recent_index.get(folder.name)
        # Absent from recents sorts after every present index
        recency = (0, idx) if idx is not None else (1, 0)
        return (not is_fav, recency, name_key(folder.name))

    return sorted(folders, key=key)


def filter_folders(folders: Sequence[Folder], search_text: str) -> List[Folder]:
    """Case-insensitive substring match on folder name."""
    needle = search_text.lower()
    if not needle:
        return list(folders)
    return [f for f in folders if needle in f.name.lower()]


@dataclass
class FolderGroups:
    favorites: List[Folder] = field(default_factory=list)
    recent: List[Folder] = field(default_factory=list)
    other: List[Folder] = field(default_factory=list)

    def __len__(self):
        return len(self.favorites) + len(self.recent) + len(self.other)

    def sections(self):
        """(title, folders) pairs for non-empty groups, in display order."""
        titled = [
            ("Favorites", self.favorites),
            ("Recent", self.recent),
            ("All Projects", self.other),
        ]
        return [(title, items) for title, items in titled if items]


def group_folders(folders: Sequence[Folder], favorites: Sequence[str], recent: Sequence[str]) -> FolderGroups:
    """Partition an ordered list into disjoint Favorites / Recent / Other groups."""
    favorite_set = set(favorites)
    recent_set = set(recent)
    groups = FolderGroups()
    for folder in folders:
        if folder.name in favorite_set:
            groups.favorites.append(folder)
        elif folder.name in recent_set:
            groups.recent.append(folder)
        else:
            groups.other.append(folder)
    return groups


def is_recent_highlight(name: str, recent: Sequence[str], is_favorite: bool) -> bool:
    if is_favorite or name not in recent:
        return False
    return list(recent).index(name) < RECENT_HIGHLIGHT
