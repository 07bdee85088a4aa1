"""Open a project in the editor, terminal and browser.

Each channel runs on a worker thread and reports exactly one LaunchResult
through the notify callback. Channels never wait on each other.
"""

import logging
import subprocess
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from commands import (
    build_terminal_script,
    derive_browser_url,
    derive_terminal_command,
    project_type_label,
)
from config import Settings
from errors import LaunchError, PreferenceError
from preferences import PreferenceStore
from scanner import Folder

logger = logging.getLogger(__name__)


class Channel(Enum):
    EDITOR = "editor"
    TERMINAL = "terminal"
    BROWSER = "browser"
    FINDER = "finder"
    PREFERENCES = "preferences"


@dataclass
class LaunchResult:
    channel: Channel
    ok: bool
    title: str
    message: str = ""


def run_command(args: List[str]) -> None:
    """Run an external command, raising LaunchError if it fails."""
    logger.debug("Running %s", args)
    try:
        subprocess.run(args, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exited with status {e.returncode}"
        raise LaunchError(f"Command failed: {args[0]}: {detail}") from e
    except OSError as e:
        raise LaunchError(f"Command failed: {args[0]}: {e.strerror or e}") from e


class LaunchOrchestrator:
    def __init__(self, settings: Settings, preferences: PreferenceStore,
                 notify: Callable[[LaunchResult], None],
                 runner: Callable[[List[str]], None] = run_command,
                 executor: Optional[Executor] = None):
        self.settings = settings
        self.preferences = preferences
        self.notify = notify
        self.runner = runner
        self.executor = executor or ThreadPoolExecutor(max_workers=4)

    def _record_recent(self, folder: Folder):
        """Move folder to the front of the recent list, reporting save failures."""
        try:
            self.preferences.add_recent(folder.name)
        except PreferenceError as e:
            logger.warning("Could not record %s as recent: %s", folder.name, e)
            self.notify(LaunchResult(Channel.PREFERENCES, False, "Failed to save recent projects", str(e)))

    def _submit(self, channel: Channel, args: List[str], success: str, failure: str):
        """Run args on a worker thread and report one result for channel."""
        def task():
            try:
                self.runner(args)
            except LaunchError as e:
                logger.warning("%s launch failed: %s", channel.value, e)
                self.notify(LaunchResult(channel, False, failure, str(e)))
                return
            except Exception as e:
                logger.exception("%s launch crashed", channel.value)
                self.notify(LaunchResult(channel, False, failure, str(e) or type(e).__name__))
                return
            self.notify(LaunchResult(channel, True, success))

        self.executor.submit(task)

    def _launch_editor(self, folder: Folder):
        """Open the folder in the configured editor."""
        self._submit(
            Channel.EDITOR,
            [self.settings.editor, str(folder.path)],
            f"Opened {folder.name}",
            "Failed to open folder",
        )

    def _launch_terminal(self, folder: Folder):
        """New terminal window that cds into the folder and starts the dev server."""
        command = derive_terminal_command(folder.project_type, folder.path)
        script = build_terminal_script(command, self.settings.terminal_app)
        label = project_type_label(folder.project_type)
        suffix = f" ({label})" if label else ""
        app = self.settings.terminal_app
        self._submit(
            Channel.TERMINAL,
            ["osascript", "-e", script],
            f"Opened {folder.name} in {app}{suffix}",
            f"Failed to open {app}",
        )

    def _launch_browser(self, folder: Folder):
        """Open the dev URL, or refuse when the project type has none."""
        browser = self.settings.browser_app
        url = derive_browser_url(folder.project_type, folder.name)
        if not url:
            self.notify(LaunchResult(
                Channel.BROWSER, False, f"Cannot open in {browser}", "Unknown project type"))
            return
        self._submit(
            Channel.BROWSER,
            ["open", "-a", browser, url],
            f"Opened {url} in {browser}",
            f"Failed to open {browser}",
        )

    def open_in_editor(self, folder: Folder):
        """Editor only. Counts as opening the project."""
        self._record_recent(folder)
        self._launch_editor(folder)

    def open_in_terminal(self, folder: Folder):
        """Terminal only."""
        self._launch_terminal(folder)

    def open_in_browser(self, folder: Folder):
        """Browser only."""
        self._launch_browser(folder)

    def open_project(self, folder: Folder):
        """Record as recent, then fire editor, terminal and browser."""
        self._record_recent(folder)
        self._launch_editor(folder)
        self._launch_terminal(folder)
        self._launch_browser(folder)

    def reveal_in_file_manager(self, folder: Folder):
        """Select the folder in Finder."""
        self._submit(
            Channel.FINDER,
            ["open", "-R", str(folder.path)],
            f"Revealed {folder.name}",
            "Failed to reveal folder",
        )

    def shutdown(self):
        """Stop accepting launches; running ones finish on their own."""
        self.executor.shutdown(wait=False)
