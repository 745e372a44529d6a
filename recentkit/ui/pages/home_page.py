"""Home page — the current file, opening files and backing up."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QPoint
from PySide6.QtWidgets import QHBoxLayout, QVBoxLayout, QWidget
from qfluentwidgets import (
    BodyLabel,
    CaptionLabel,
    PrimaryPushButton,
    PushButton,
    ScrollArea,
    SimpleCardWidget,
    SubtitleLabel,
)
from qfluentwidgets import FluentIcon as FIF

from recentkit.i18n import t
from recentkit.ui.recent_menu import RecentFilesMenu

if TYPE_CHECKING:
    from recentkit.context import AppContext
    from recentkit.models.file_spec import FileSpec
    from recentkit.ui.main_window import MainWindow


class HomePage(ScrollArea):
    """Shows the file currently open and the actions that work on it."""

    def __init__(self, ctx: AppContext, window: MainWindow) -> None:
        super().__init__(window)
        self._ctx = ctx
        self._window = window
        self.setObjectName("homePage")
        self.setWidgetResizable(True)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        # Current file
        card = SimpleCardWidget(self)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(16, 12, 16, 12)
        self._title = SubtitleLabel(t("home.no_file"), card)
        self._path = BodyLabel("", card)
        self._path.setWordWrap(True)
        self._last_backup = CaptionLabel("", card)
        card_layout.addWidget(self._title)
        card_layout.addWidget(self._path)
        card_layout.addWidget(self._last_backup)
        layout.addWidget(card)

        # Toolbar
        toolbar = QHBoxLayout()

        self._open_btn = PrimaryPushButton(FIF.FOLDER, t("home.open"), self)
        self._open_btn.clicked.connect(self._window.choose_file_to_open)
        toolbar.addWidget(self._open_btn)

        self._recent_menu = RecentFilesMenu(ctx.recent_files, self)
        self._recent_btn = PushButton(FIF.HISTORY, t("menu.open_recent"), self)
        self._recent_btn.clicked.connect(self._show_recent_menu)
        toolbar.addWidget(self._recent_btn)

        toolbar.addStretch()

        self._checkpoint_btn = PushButton(FIF.FLAG, t("home.checkpoint"), self)
        self._checkpoint_btn.setToolTip(t("home.checkpoint_hint"))
        self._checkpoint_btn.clicked.connect(self._window.checkpoint)
        toolbar.addWidget(self._checkpoint_btn)

        self._backup_btn = PushButton(FIF.SAVE, t("home.backup_now"), self)
        self._backup_btn.clicked.connect(self._window.back_up_now)
        toolbar.addWidget(self._backup_btn)

        layout.addLayout(toolbar)
        layout.addStretch(1)
        self.setWidget(container)

        self.set_current_file(None)

    def _show_recent_menu(self) -> None:
        pos = self._recent_btn.mapToGlobal(QPoint(0, self._recent_btn.height()))
        self._recent_menu.exec(pos)

    def set_current_file(self, spec: FileSpec | None) -> None:
        has_file = spec is not None
        self._checkpoint_btn.setEnabled(has_file)
        self._backup_btn.setEnabled(has_file)
        if spec is None:
            self._title.setText(t("home.no_file"))
            self._path.setText("")
            self._last_backup.setText("")
            return
        self._title.setText(spec.brief_display_name)
        self._path.setText(spec.display_name)
        if spec.last_backup:
            self._last_backup.setText(t("home.last_backup", date=spec.last_backup.strftime("%Y-%m-%d %H:%M")))
        else:
            self._last_backup.setText(t("home.never_backed_up"))
