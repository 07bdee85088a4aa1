"""Searchable project list with favorites, recents and launch actions."""

from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QLabel, QLineEdit, QListWidget, QListWidgetItem, QMainWindow,
    QMenu, QVBoxLayout, QWidget,
)
from PyQt6.QtGui import QAction, QColor, QFont, QKeyEvent, QKeySequence
from PyQt6.QtCore import Qt, QObject, QTimer, pyqtSignal

from commands import project_type_label
from errors import PreferenceError
from launcher import LaunchOrchestrator, LaunchResult
from ranking import is_recent_highlight
from scanner import Folder
from session import LauncherSession

FOLDER_ROLE = Qt.ItemDataRole.UserRole
TOAST_TIMEOUT_MS = 3500

TYPE_COLORS = {
    "DDEV": "#2563eb",
    "Astro": "#dc2626",
}


class LaunchSignals(QObject):
    """Carries launch results from worker threads to the UI thread."""
    result = pyqtSignal(object)


class ToastArea(QWidget):
    """Stack of transient notifications in the bottom right corner."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.stack = QVBoxLayout(self)
        self.stack.setContentsMargins(0, 0, 0, 0)
        self.stack.setSpacing(4)
        self.labels = []

    def show_message(self, ok: bool, title: str, message: str = ""):
        """Add a green (ok) or red toast that hides itself after a few seconds."""
        text = title if not message else f"{title}\n{message}"
        background = "rgba(30, 120, 60, 220)" if ok else "rgba(170, 40, 40, 220)"
        label = QLabel(text, self)
        label.setWordWrap(True)
        label.setMaximumWidth(420)
        label.setStyleSheet(f"""
            QLabel {{
                background-color: {background};
                color: white;
                padding: 6px 12px;
                font-family: Menlo, Monaco, monospace;
                font-size: 12px;
            }}
        """)
        self.stack.addWidget(label)
        self.labels.append(label)
        self.reposition()
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._dismiss(label))
        timer.timeout.connect(timer.deleteLater)
        timer.start(TOAST_TIMEOUT_MS)

    def _dismiss(self, label: QLabel):
        """Remove one toast."""
        if label in self.labels:
            self.labels.remove(label)
            self.stack.removeWidget(label)
            label.deleteLater()
        self.reposition()

    def reposition(self):
        """Pin the stack to the bottom right of the parent window."""
        self.setVisible(bool(self.labels))
        self.adjustSize()
        parent = self.parentWidget()
        if parent is not None:
            self.move(parent.width() - self.width() - 10, parent.height() - self.height() - 10)
        self.raise_()


class LauncherWindow(QMainWindow):
    def __init__(self, session: LauncherSession, orchestrator: Optional[LaunchOrchestrator] = None):
        super().__init__()
        self.session = session

        # Launch results are posted from worker threads; the signal queues them
        self.launch_signals = LaunchSignals()
        self.launch_signals.result.connect(self._on_launch_result)
        if orchestrator is None:
            orchestrator = LaunchOrchestrator(
                session.settings,
                session.preferences,
                notify=self.launch_signals.result.emit,
            )
        self.orchestrator = orchestrator

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search folders... (e.g., 'orp' for 'orpheum')")
        self.search.setClearButtonEnabled(True)
        self.search.textChanged.connect(self._on_search_changed)
        self.search.returnPressed.connect(self.open_project)
        layout.addWidget(self.search)

        self.list = QListWidget()
        self.list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list.customContextMenuRequested.connect(self._show_context_menu)
        self.list.itemActivated.connect(lambda item: self.open_project())
        self.list.currentItemChanged.connect(lambda current, previous: self._update_favorite_action())
        layout.addWidget(self.list, 1)

        self.empty_label = QLabel()
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setWordWrap(True)
        self.empty_label.setStyleSheet("QLabel { color: #888; font-size: 14px; }")
        layout.addWidget(self.empty_label, 1)

        self.setCentralWidget(central)
        self.toasts = ToastArea(self)

        self._create_actions()

        self.setWindowTitle("Projects")
        self.resize(720, 560)

        self.refresh()
        if self.session.scan_error:
            self.notify(False, "Failed to read folders", self.session.scan_error)

    def _create_actions(self):
        """Actions double as keyboard shortcuts and context menu entries."""
        settings = self.session.settings
        specs = [
            ("Open Project", None, self.open_project),
            ("Toggle Favorite", "Ctrl+F", self.toggle_favorite),
            (f"Open in {settings.editor} Only", "Ctrl+Shift+Return", self.open_in_editor),
            (f"Open in {settings.terminal_app} Only", "Ctrl+T", self.open_in_terminal),
            (f"Open in {settings.browser_app} Only", "Ctrl+B", self.open_in_browser),
            ("Show in Finder", "Ctrl+R", self.reveal_in_file_manager),
            ("Copy Path", "Ctrl+Shift+C", self.copy_path),
        ]
        self.folder_actions = []
        for title, shortcut, slot in specs:
            action = QAction(title, self)
            if shortcut:
                action.setShortcut(QKeySequence(shortcut))
                action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
            action.triggered.connect(slot)
            self.addAction(action)
            self.folder_actions.append(action)
        self.favorite_action = self.folder_actions[1]
        self._update_favorite_action()

    # -- rendering

    def refresh(self):
        """Rebuild the list from the session, keeping the selection if possible."""
        selected = self.selected_folder()
        selected_name = selected.name if selected else None

        self.list.clear()
        groups = self.session.groups()
        recent = self.session.preferences.recent

        first_item = None
        for title, folders in groups.sections():
            self.list.addItem(self._section_item(title, len(folders)))
            for folder in folders:
                item = self._folder_item(folder, recent)
                self.list.addItem(item)
                if first_item is None:
                    first_item = item
                if folder.name == selected_name:
                    self.list.setCurrentItem(item)

        if self.list.currentItem() is None and first_item is not None:
            self.list.setCurrentItem(first_item)

        self._update_empty_state(len(groups) > 0)
        self._update_favorite_action()

    def _section_item(self, title: str, count: int) -> QListWidgetItem:
        """Unselectable group header."""
        item = QListWidgetItem(f"{title}  ·  {count} projects")
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        font = QFont()
        font.setBold(True)
        item.setFont(font)
        item.setForeground(QColor("#888"))
        return item

    def _folder_item(self, folder: Folder, recent) -> QListWidgetItem:
        """Row with favorite star, type tag and recent marker."""
        icon = "★" if folder.is_favorite else "📁"
        parts = [f"{icon}  {folder.name}"]
        label = project_type_label(folder.project_type)
        if label:
            parts.append(f"[{label}]")
        if is_recent_highlight(folder.name, recent, folder.is_favorite):
            parts.append("🕒")
        item = QListWidgetItem("   ".join(parts))
        item.setData(FOLDER_ROLE, folder.name)
        item.setToolTip(str(folder.path))
        if label:
            item.setForeground(QColor(TYPE_COLORS[label]))
        return item

    def _update_empty_state(self, has_items: bool):
        """Swap the list for a message when nothing is shown."""
        self.list.setVisible(has_items)
        self.empty_label.setVisible(not has_items)
        if has_items:
            return
        if self.session.scan_error:
            self.empty_label.setText(f"Failed to read folders\n\n{self.session.scan_error}")
        elif self.session.search_text:
            self.empty_label.setText(f'No folders found\n\nNo matches for "{self.session.search_text}"')
        else:
            self.empty_label.setText("No folders found\n\nNo folders in this directory")

    # -- events

    def _on_search_changed(self, text: str):
        """Filter live as the user types."""
        self.session.set_search(text)
        self.refresh()

    def _on_launch_result(self, result: LaunchResult):
        """Runs on the UI thread via the queued signal."""
        self.notify(result.ok, result.title, result.message)

    def _on_recent_recorded(self):
        """Re-rank after an open moved a folder to the front of recents."""
        self.session.resort()
        self.refresh()

    def notify(self, ok: bool, title: str, message: str = ""):
        """Show a transient notification."""
        self.toasts.show_message(ok, title, message)

    def _update_favorite_action(self):
        """Title the favorite action for the selected folder."""
        folder = self.selected_folder()
        if folder is not None and folder.is_favorite:
            self.favorite_action.setText("Remove from Favorites")
        else:
            self.favorite_action.setText("Add to Favorites")

    def _show_context_menu(self, pos):
        """Action menu for the folder under the cursor."""
        item = self.list.itemAt(pos)
        if item is None or item.data(FOLDER_ROLE) is None:
            return
        self.list.setCurrentItem(item)
        menu = QMenu(self)
        menu.addActions(self.folder_actions)
        menu.exec(self.list.viewport().mapToGlobal(pos))

    def selected_folder(self) -> Optional[Folder]:
        """Folder for the current row, or None on a header or empty list."""
        item = self.list.currentItem()
        if item is None:
            return None
        name = item.data(FOLDER_ROLE)
        if name is None:
            return None
        return self.session.find(name)

    # -- actions

    def open_project(self):
        """Open the selected folder in editor, terminal and browser."""
        folder = self.selected_folder()
        if folder is None:
            return
        self.orchestrator.open_project(folder)
        self._on_recent_recorded()

    def open_in_editor(self):
        """Open the selected folder in the editor only."""
        folder = self.selected_folder()
        if folder is None:
            return
        self.orchestrator.open_in_editor(folder)
        self._on_recent_recorded()

    def open_in_terminal(self):
        """Open a terminal for the selected folder only."""
        folder = self.selected_folder()
        if folder is not None:
            self.orchestrator.open_in_terminal(folder)

    def open_in_browser(self):
        """Open the dev URL of the selected folder only."""
        folder = self.selected_folder()
        if folder is not None:
            self.orchestrator.open_in_browser(folder)

    def reveal_in_file_manager(self):
        """Show the selected folder in Finder."""
        folder = self.selected_folder()
        if folder is not None:
            self.orchestrator.reveal_in_file_manager(folder)

    def copy_path(self):
        """Copy the selected folder path to the clipboard."""
        folder = self.selected_folder()
        if folder is None:
            return
        QApplication.clipboard().setText(str(folder.path))
        self.notify(True, "Copied path to clipboard", str(folder.path))

    def toggle_favorite(self):
        """Add or remove the selected folder from favorites."""
        folder = self.selected_folder()
        if folder is None:
            return
        try:
            is_favorite = self.session.toggle_favorite(folder.name)
        except PreferenceError as e:
            self.notify(False, "Failed to save favorites", str(e))
            return
        if is_favorite:
            self.notify(True, f"Added {folder.name} to favorites")
        else:
            self.notify(True, f"Removed {folder.name} from favorites")
        self.refresh()

    def _move_selection(self, delta: int):
        """Move to the next selectable row, skipping section headers."""
        row = self.list.currentRow()
        count = self.list.count()
        while 0 <= row + delta < count:
            row += delta
            item = self.list.item(row)
            if item.data(FOLDER_ROLE) is not None:
                self.list.setCurrentItem(item)
                return

    def keyPressEvent(self, event: QKeyEvent):
        """Arrow keys move between folders from the search field; Esc clears or closes."""
        key = event.key()

        if key == Qt.Key.Key_Down:
            self._move_selection(1)
        elif key == Qt.Key.Key_Up:
            self._move_selection(-1)
        elif key == Qt.Key.Key_Escape:
            if self.search.text():
                self.search.clear()
            else:
                self.close()
        else:
            super().keyPressEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.toasts.reposition()

    def closeEvent(self, event):
        """Stop the launch executor."""
        self.orchestrator.shutdown()
        super().closeEvent(event)
