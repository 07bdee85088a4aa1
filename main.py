#!/usr/bin/env python3
"""Project launcher: open a project in editor, terminal and browser at once."""

import argparse
import locale
import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QFileDialog

from config import load_settings
from preferences import JsonFileStore, PreferenceStore
from session import LauncherSession
from window import LauncherWindow


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="project-launcher", description=__doc__)
    parser.add_argument("base_folder", nargs="?", help="folder whose subfolders are projects")
    parser.add_argument("-c", "--config", help="path to config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="log launches and failures")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Name ordering follows the user's locale
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logging.getLogger(__name__).warning("Unsupported locale, sorting names by code point")

    app = QApplication(sys.argv[:1])
    settings = load_settings(args.config, args.base_folder)

    # Ask for a folder when the configured one is missing
    if not args.base_folder and not settings.base_folder.is_dir():
        folder_str = QFileDialog.getExistingDirectory(
            None,
            "Select your projects folder",
            str(Path.home())
        )
        if not folder_str:
            sys.exit(0)
        settings.base_folder = Path(folder_str)

    preferences = PreferenceStore(JsonFileStore(settings.prefs_file), settings.max_recent)
    session = LauncherSession(settings, preferences)

    print(f"Scanning {settings.base_folder}...")
    session.reload()
    if session.scan_error:
        print(f"Failed to read folders: {session.scan_error}")
    else:
        print(f"Found {len(session.folders)} projects")

    window = LauncherWindow(session)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
