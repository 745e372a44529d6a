"""Open Recent menu — a QMenu kept index-aligned with a RecentFiles list."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenu, QWidget

from recentkit.i18n import t
from recentkit.ui.utils import show_warning

if TYPE_CHECKING:
    from recentkit.core.recent_files import RecentFiles
    from recentkit.models.file_spec import FileSpec


class RecentFilesMenu(QMenu):
    """One action per recent file, then a separator and "Clear History"."""

    def __init__(self, recent_files: RecentFiles, parent: QWidget | None = None) -> None:
        super().__init__(t("menu.open_recent"), parent)
        self._recent_files = recent_files
        self._file_actions: list[QAction] = []
        self.setToolTipsVisible(True)

        self._separator = self.addSeparator()
        self._clear_action = QAction(t("menu.clear_history"), self)
        self._clear_action.triggered.connect(self._recent_files.clear_history)
        self.addAction(self._clear_action)

        # Replays existing entries through file_inserted
        recent_files.subscribe(self)

    # ── RecentFilesListener ──

    def file_inserted(self, index: int, spec: FileSpec) -> None:
        action = QAction(spec.brief_display_name, self)
        action.setToolTip(spec.display_name)
        action.setData(spec.path)
        action.triggered.connect(lambda _=False, p=spec.path: self._on_open_recent(p))
        before = self._file_actions[index] if index < len(self._file_actions) else self._separator
        self.insertAction(before, action)
        self._file_actions.insert(index, action)

    def file_removed(self, index: int) -> None:
        if index < len(self._file_actions):
            action = self._file_actions.pop(index)
            self.removeAction(action)
            action.deleteLater()

    def history_cleared(self) -> None:
        # Each removal has already arrived through file_removed
        pass

    # ── Actions ──

    def _on_open_recent(self, path: str) -> None:
        if self._recent_files.open_recent(path) is None:
            show_warning(self.parentWidget() or self, t("menu.unavailable"), path)
