"""Derive the terminal start command and browser URL for a project type."""

from pathlib import Path

from scanner import ProjectType

DEV_COMMANDS = {
    ProjectType.DDEV: "ddev npm run dev",
    ProjectType.ASTRO: "npm run dev",
}

ASTRO_DEV_URL = "http://localhost:4321/"

TYPE_LABELS = {
    ProjectType.DDEV: "DDEV",
    ProjectType.ASTRO: "Astro",
}

TERMINAL_SCRIPT = '''
tell application "{app}"
  create window with default profile
  tell current session of current window
    write text "{command}"
  end tell
end tell
'''


def derive_terminal_command(project_type: ProjectType, path: str | Path) -> str:
    """cd into the project, then start its dev server if the type has one."""
    command = f'cd "{path}"'
    dev = DEV_COMMANDS.get(project_type)
    if dev:
        command += f" && {dev}"
    return command


def derive_browser_url(project_type: ProjectType, folder_name: str) -> str:
    """Local dev URL, or empty string when the type has none."""
    if project_type == ProjectType.DDEV:
        return f"https://{folder_name}.ddev.site"
    if project_type == ProjectType.ASTRO:
        return ASTRO_DEV_URL
    return ""


def escape_applescript(text: str) -> str:
    """Escape text for use inside an AppleScript string literal."""
    return text.replace('\\', '\\\\').replace('"', '\\"')


def build_terminal_script(command: str, terminal_app: str = "iTerm") -> str:
    """AppleScript that opens a terminal window and runs command in it."""
    return TERMINAL_SCRIPT.format(
        app=escape_applescript(terminal_app),
        command=escape_applescript(command),
    )


def project_type_label(project_type: ProjectType) -> str:
    """Short display tag for a project type, empty for unknown."""
    return TYPE_LABELS.get(project_type, "")
