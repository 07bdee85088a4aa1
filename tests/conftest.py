import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tests.helpers import MemoryStore, make_project  # noqa: E402


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sites(tmp_path):
    """Base folder with alpha (plain), beta (ddev) and gamma (astro)."""
    base = tmp_path / "Sites"
    base.mkdir()
    make_project(base, "alpha")
    make_project(base, "beta", ddev=True)
    make_project(base, "gamma", package={"devDependencies": {"astro": "^4.0.0"}})
    return base
