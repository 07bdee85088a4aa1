import json

import pytest

from config import Settings
from errors import PreferenceError
from preferences import FAVORITES_KEY, RECENT_PROJECTS_KEY, PreferenceStore
from scanner import ProjectType
from session import LauncherSession
from tests.helpers import MemoryStore


def make_session(base, store=None):
    prefs = PreferenceStore(store if store is not None else MemoryStore())
    session = LauncherSession(Settings(base_folder=base), prefs)
    session.reload()
    return session


def names(items):
    return [f.name for f in items]


def test_initial_scan_is_alphabetical_in_other(sites):
    session = make_session(sites)
    groups = session.groups()

    assert groups.favorites == []
    assert groups.recent == []
    assert names(groups.other) == ["alpha", "beta", "gamma"]
    types = [f.project_type for f in groups.other]
    assert types == [ProjectType.UNKNOWN, ProjectType.DDEV, ProjectType.ASTRO]


def test_favoriting_moves_folder_to_favorites(sites):
    session = make_session(sites)

    assert session.toggle_favorite("alpha") is True

    groups = session.groups()
    assert names(groups.favorites) == ["alpha"]
    assert names(groups.other) == ["beta", "gamma"]
    assert session.find("alpha").is_favorite


def test_unfavoriting_restores_order(sites):
    session = make_session(sites)
    session.toggle_favorite("gamma")
    assert names(session.folders) == ["gamma", "alpha", "beta"]

    session.toggle_favorite("gamma")
    assert names(session.folders) == ["alpha", "beta", "gamma"]
    assert not session.find("gamma").is_favorite


def test_recent_group_after_open(sites):
    session = make_session(sites)
    session.preferences.add_recent("gamma")
    session.resort()

    groups = session.groups()
    assert names(groups.recent) == ["gamma"]
    assert names(groups.other) == ["alpha", "beta"]
    assert names(session.folders) == ["gamma", "alpha", "beta"]


def test_preferences_loaded_on_reload(sites):
    store = MemoryStore({
        FAVORITES_KEY: json.dumps(["beta"]),
        RECENT_PROJECTS_KEY: json.dumps(["gamma", "beta", "removed"]),
    })
    session = make_session(sites, store)

    assert names(session.folders) == ["beta", "gamma", "alpha"]
    groups = session.groups()
    assert names(groups.favorites) == ["beta"]
    assert names(groups.recent) == ["gamma"]
    assert names(groups.other) == ["alpha"]


def test_search_filters_groups(sites):
    session = make_session(sites)
    session.toggle_favorite("gamma")

    session.set_search("MM")
    groups = session.groups()
    assert names(groups.favorites) == ["gamma"]
    assert groups.other == []

    session.set_search("zzz")
    assert len(session.groups()) == 0


def test_missing_base_sets_scan_error(tmp_path):
    session = make_session(tmp_path / "missing")
    assert session.scan_error
    assert session.folders == []
    assert len(session.groups()) == 0


def test_reload_clears_scan_error(tmp_path):
    base = tmp_path / "Sites"
    session = make_session(base)
    assert session.scan_error

    base.mkdir()
    (base / "alpha").mkdir()
    session.reload()
    assert session.scan_error is None
    assert names(session.folders) == ["alpha"]


def test_failed_toggle_keeps_state(sites):
    class ReadOnlyStore(MemoryStore):
        def set(self, key, value):
            raise PreferenceError("read-only")

    session = make_session(sites, ReadOnlyStore())
    with pytest.raises(PreferenceError):
        session.toggle_favorite("alpha")
    assert not session.find("alpha").is_favorite
    assert session.groups().favorites == []
