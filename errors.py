"""Exceptions raised by the launcher."""


class LauncherError(Exception):
    """Base class for launcher errors."""


class ScanError(LauncherError):
    """Base folder missing or unreadable."""


class PreferenceError(LauncherError):
    """Preferences could not be written."""


class LaunchError(LauncherError):
    """An external application failed to start."""
