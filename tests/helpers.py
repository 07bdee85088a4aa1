import json
from pathlib import Path


class MemoryStore:
    """In-memory stand-in for the key-value preference file."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value


class ImmediateExecutor:
    """Runs submitted work on the calling thread."""

    def __init__(self):
        self.submitted = 0
        self.shut_down = False

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1
        fn(*args, **kwargs)

    def shutdown(self, wait=True):
        self.shut_down = True


class RecordingRunner:
    """Records commands; raises for commands whose program is in fail."""

    def __init__(self, fail=()):
        self.calls = []
        self.fail = dict(fail)

    def __call__(self, args):
        from errors import LaunchError

        self.calls.append(list(args))
        if args[0] in self.fail:
            raise LaunchError(self.fail[args[0]])


def make_project(base: Path, name: str, ddev=False, package=None, raw_package=None) -> Path:
    folder = base / name
    folder.mkdir(parents=True)
    if ddev:
        (folder / ".ddev").mkdir()
        (folder / ".ddev" / "config.yaml").write_text("name: " + name + "\n")
    if package is not None:
        (folder / "package.json").write_text(json.dumps(package))
    if raw_package is not None:
        (folder / "package.json").write_text(raw_package)
    return folder
