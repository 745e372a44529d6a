"""Main window — FluentWindow hosting the recent files and their backups."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from PySide6.QtCore import QSize
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QFileDialog
from qfluentwidgets import FluentIcon as FIF
from qfluentwidgets import FluentWindow, NavigationItemPosition

from recentkit.core.backup_writer import backup_file_name
from recentkit.core.recent_files import FileSelectionMode
from recentkit.i18n import t
from recentkit.ui.pages.file_prefs_page import FilePrefsPage
from recentkit.ui.pages.home_page import HomePage
from recentkit.ui.utils import ask_yes_no, show_error, show_success

if TYPE_CHECKING:
    from recentkit.context import AppContext
    from recentkit.models.file_spec import FileSpec


class MainWindow(FluentWindow):
    """Application main window.

    Acts as the host application for the core services: it opens files
    picked from the recent list (FileSpecOpener), performs backups
    (AppToBackup) and asks whether a suggested backup is wanted
    (BackupSuggester).
    """

    def __init__(self, ctx: AppContext) -> None:
        super().__init__()
        self._ctx = ctx
        self._current: FileSpec | None = None

        ctx.recent_files.opener = self
        ctx.backup_policy.attach(self, self)

        self.setWindowTitle("RecentKit")
        self.setMinimumSize(QSize(860, 560))
        self.resize(1040, 700)

        self._init_pages()

    def _init_pages(self) -> None:
        """Initialize navigation pages."""
        self._home_page = HomePage(self._ctx, self)
        self.addSubInterface(self._home_page, FIF.HOME, t("nav.home"))

        self._prefs_page = FilePrefsPage(self._ctx, self)
        self.addSubInterface(
            self._prefs_page,
            FIF.SETTING,
            t("nav.preferences"),
            position=NavigationItemPosition.BOTTOM,
        )

    @property
    def current_file(self) -> FileSpec | None:
        return self._current

    def _slot_of(self, spec: FileSpec) -> int | None:
        """Slot of *spec* in the recent list, or None once it has left the list."""
        index = self._ctx.recent_files.find(spec.path)
        return index if index >= 0 else None

    # ── FileSpecOpener ──

    def handle_open_file(self, spec: FileSpec) -> None:
        previous = self._current
        if previous is not None and previous.path != spec.path:
            # Switching files closes the previous one
            self._ctx.backup_policy.handle_close(previous, self._ctx.recent_files.qualifier, self._slot_of(previous))
        self._current = spec
        self._home_page.set_current_file(spec)
        logger.info(f"Opened {spec.path}")

    def choose_file_to_open(self) -> None:
        """Prompt the user to choose a file or folder to be opened."""
        if self._ctx.recent_files.selection_mode is FileSelectionMode.DIRECTORIES_ONLY:
            path = QFileDialog.getExistingDirectory(self, t("home.choose_folder"))
        else:
            path, _ = QFileDialog.getOpenFileName(self, t("home.choose_file"))
        if not path:
            return
        if self._ctx.recent_files.open_path(path) is None:
            show_error(self, t("home.open_error"), path)

    # ── BackupSuggester ──

    def suggest_backup(self) -> bool:
        return ask_yes_no(
            self,
            t("backup.suggest_title"),
            t("backup.suggest_msg"),
            t("backup.yes_please"),
            t("backup.no_thanks"),
        )

    # ── AppToBackup ──

    def prompt_for_backup(self) -> bool:
        spec = self._current or self._ctx.recent_files.get(0)
        if spec is None or spec.file is None:
            return False
        writer = self._ctx.backup_writer
        default = writer.default_folder(spec) / backup_file_name(spec.file, ".zip")
        target, _ = QFileDialog.getSaveFileName(self, t("backup.choose_target"), str(default), "ZIP (*.zip)")
        if not target:
            return False
        target_path = Path(target)
        if writer.write_backup(spec.file, target_path) is None:
            show_error(self, t("backup.failed"), str(target_path))
            return False
        spec.backup_folder = str(target_path.parent)
        writer.rotate(target_path.parent, spec.file)
        show_success(self, t("backup.success"), target_path.name)
        return True

    def backup_without_prompt(self) -> bool:
        spec = self._current or self._ctx.recent_files.get(0)
        if spec is None:
            return False
        return self._ctx.backup_writer.backup(spec) is not None

    # ── Actions ──

    def back_up_now(self) -> None:
        """Manual backup, whatever the backup frequency."""
        spec = self._current
        if spec is not None and self.prompt_for_backup():
            self._ctx.backup_policy.save_last_backup_date(spec, self._ctx.recent_files.qualifier, self._slot_of(spec))
            self._home_page.set_current_file(spec)

    def checkpoint(self) -> None:
        """A major change to the current file; offer a backup."""
        spec = self._current
        if spec is None:
            return
        if self._ctx.backup_policy.handle_major_event(spec, self._ctx.recent_files.qualifier, self._slot_of(spec)):
            self._home_page.set_current_file(spec)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._current is not None:
            self._ctx.backup_policy.handle_close(
                self._current, self._ctx.recent_files.qualifier, self._slot_of(self._current)
            )
        else:
            self._ctx.backup_policy.handle_close_current(self._ctx.recent_files)
        self._ctx.recent_files.save_prefs()
        super().closeEvent(event)
