"""File preferences page — backups, recent files and startup behaviour."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFileDialog, QVBoxLayout, QWidget
from qfluentwidgets import (
    ComboBox as FluentComboBox,
    LineEdit,
    PushSettingCard,
    ScrollArea,
    SettingCardGroup,
    Slider,
    SpinBox,
)
from qfluentwidgets import FluentIcon as FIF

from recentkit.core.backup_policy import BackupFrequency
from recentkit.core.file_prefs import LAST_FILE_OPENED, NO_FILE
from recentkit.core.recent_files import RECENT_FILES_MAX_LIMIT
from recentkit.i18n import SYSTEM_LANGUAGE, supported_languages, t
from recentkit.ui.utils import show_error, show_success

if TYPE_CHECKING:
    from recentkit.context import AppContext
    from recentkit.models.file_spec import FileSpec

# Fixed entries ahead of the mirrored recent files in the startup combo
_STARTUP_LITERALS = 2
_PURGE_NEVER, _PURGE_NOW, _PURGE_AT_STARTUP = range(3)

_LANG_LABELS = {"en_US": "English", "zh_CN": "简体中文"}


class FilePrefsPage(ScrollArea):
    """Preferences for files and backups.

    The startup combo box mirrors the recent files list, so this page
    subscribes to it as a RecentFilesListener.
    """

    def __init__(self, ctx: AppContext, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._ctx = ctx
        self._syncing = False
        self.setObjectName("filePrefsPage")
        self.setWidgetResizable(True)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        layout.addWidget(self._init_backup_group())
        layout.addWidget(self._init_recent_group())
        layout.addWidget(self._init_startup_group())
        layout.addWidget(self._init_language_group())

        layout.addStretch(1)
        self.setWidget(container)

        self._syncing = True
        ctx.recent_files.subscribe(self)
        self._select_startup_choice()
        self._syncing = False

    # ── Construction ──

    def _combo_card(self, icon, title: str, content: str, group: SettingCardGroup) -> PushSettingCard:
        card = PushSettingCard("", icon, title, content, group)
        card.button.hide()
        return card

    def _init_backup_group(self) -> SettingCardGroup:
        group = SettingCardGroup(t("prefs.backup_group"), self)
        prefs = self._ctx.config

        self._frequency_card = self._combo_card(
            FIF.SAVE, t("prefs.backup_frequency"), t("prefs.backup_frequency_hint"), group
        )
        self._frequency_combo = FluentComboBox(self)
        for frequency, key in (
            (BackupFrequency.MANUAL, "prefs.manual_backups"),
            (BackupFrequency.OCCASIONAL, "prefs.occasional_backups"),
            (BackupFrequency.AUTOMATIC, "prefs.automatic_backups"),
        ):
            self._frequency_combo.addItem(t(key), userData=frequency.value)
        current = self._ctx.backup_policy.frequency.value
        for i in range(self._frequency_combo.count()):
            if self._frequency_combo.itemData(i) == current:
                self._frequency_combo.setCurrentIndex(i)
                break
        self._frequency_combo.currentIndexChanged.connect(self._on_frequency_changed)
        self._frequency_card.hBoxLayout.insertWidget(2, self._frequency_combo)
        group.addSettingCard(self._frequency_card)

        self._days_card = self._combo_card(
            FIF.CALENDAR, t("prefs.days_between_backups"), t("prefs.days_between_backups_hint"), group
        )
        self._days_spin = SpinBox(self)
        self._days_spin.setRange(1, 365)
        self._days_spin.setValue(prefs.days_between_backups)
        self._days_spin.valueChanged.connect(self._on_days_changed)
        self._days_card.hBoxLayout.insertWidget(2, self._days_spin)
        group.addSettingCard(self._days_card)

        self._keep_card = self._combo_card(
            FIF.HISTORY, t("prefs.backups_to_keep"), t("prefs.backups_to_keep_hint"), group
        )
        self._keep_spin = SpinBox(self)
        self._keep_spin.setRange(1, 999)
        self._keep_spin.setValue(prefs.backups_to_keep)
        self._keep_spin.valueChanged.connect(self._on_keep_changed)
        self._keep_card.hBoxLayout.insertWidget(2, self._keep_spin)
        group.addSettingCard(self._keep_card)

        self._backup_folder_card = PushSettingCard(
            t("prefs.browse"),
            FIF.FOLDER,
            t("prefs.backup_folder"),
            str(prefs.backup_folder or t("prefs.not_set")),
            group,
        )
        self._backup_folder_card.clicked.connect(self._on_browse_backup_folder)
        group.addSettingCard(self._backup_folder_card)
        return group

    def _init_recent_group(self) -> SettingCardGroup:
        group = SettingCardGroup(t("prefs.recent_group"), self)
        recent_max = self._ctx.file_prefs.recent_files_max

        self._max_card = self._combo_card(
            FIF.DOCUMENT, t("prefs.recent_files_max"), t("prefs.recent_files_max_hint"), group
        )
        self._max_slider = Slider(Qt.Horizontal, self)
        self._max_slider.setRange(1, RECENT_FILES_MAX_LIMIT)
        self._max_slider.setValue(recent_max)
        self._max_slider.setMinimumWidth(200)
        self._max_slider.valueChanged.connect(self._on_max_slider_changed)

        self._max_edit = LineEdit(self)
        self._max_edit.setText(str(recent_max))
        self._max_edit.setMaximumWidth(70)
        self._max_edit.editingFinished.connect(self._on_max_text_changed)

        self._max_card.hBoxLayout.insertWidget(2, self._max_slider)
        self._max_card.hBoxLayout.insertWidget(3, self._max_edit)
        group.addSettingCard(self._max_card)

        self._purge_card = self._combo_card(
            FIF.BROOM, t("prefs.purge_inaccessible"), t("prefs.purge_inaccessible_hint"), group
        )
        self._purge_combo = FluentComboBox(self)
        self._purge_combo.addItems([t("prefs.purge_never"), t("prefs.purge_now"), t("prefs.purge_at_startup")])
        self._purge_combo.setCurrentIndex(self._stored_purge_index())
        self._purge_combo.currentIndexChanged.connect(self._on_purge_changed)
        self._purge_card.hBoxLayout.insertWidget(2, self._purge_combo)
        group.addSettingCard(self._purge_card)
        return group

    def _init_startup_group(self) -> SettingCardGroup:
        group = SettingCardGroup(t("prefs.startup_group"), self)

        self._startup_card = self._combo_card(
            FIF.PLAY, t("prefs.launch_at_startup"), t("prefs.launch_at_startup_hint"), group
        )
        self._startup_combo = FluentComboBox(self)
        self._startup_combo.addItem(t("prefs.startup_nothing"), userData=NO_FILE)
        self._startup_combo.addItem(t("prefs.startup_last_file"), userData=LAST_FILE_OPENED)
        self._startup_combo.setMinimumWidth(220)
        self._startup_combo.currentIndexChanged.connect(self._on_startup_changed)
        self._startup_card.hBoxLayout.insertWidget(2, self._startup_combo)
        group.addSettingCard(self._startup_card)

        self._essential_card = PushSettingCard(
            t("prefs.browse"),
            FIF.PIN,
            t("prefs.essential_path"),
            self._ctx.file_prefs.essential_path or t("prefs.not_set"),
            group,
        )
        self._essential_card.clicked.connect(self._on_browse_essential)
        group.addSettingCard(self._essential_card)
        return group

    def _init_language_group(self) -> SettingCardGroup:
        group = SettingCardGroup(t("prefs.language_group"), self)
        self._lang_card = self._combo_card(FIF.LANGUAGE, t("prefs.language"), t("prefs.language_hint"), group)
        self._lang_combo = FluentComboBox(self)
        self._lang_combo.addItem(t("prefs.language_system"), userData=SYSTEM_LANGUAGE)
        for lang in supported_languages():
            self._lang_combo.addItem(_LANG_LABELS.get(lang, lang), userData=lang)
        cur = self._ctx.config.language
        for i in range(self._lang_combo.count()):
            if self._lang_combo.itemData(i) == cur:
                self._lang_combo.setCurrentIndex(i)
                break
        self._lang_combo.currentIndexChanged.connect(self._on_language_changed)
        self._lang_card.hBoxLayout.insertWidget(2, self._lang_combo)
        group.addSettingCard(self._lang_card)
        return group

    # ── RecentFilesListener ──

    def file_inserted(self, index: int, spec: FileSpec) -> None:
        syncing, self._syncing = self._syncing, True
        self._startup_combo.insertItem(index + _STARTUP_LITERALS, spec.brief_display_name, userData=spec.path)
        self._syncing = syncing
        if spec.path == self._ctx.file_prefs.launch_at_startup:
            self._select_startup_choice()

    def file_removed(self, index: int) -> None:
        combo_index = index + _STARTUP_LITERALS
        if combo_index < self._startup_combo.count():
            syncing, self._syncing = self._syncing, True
            self._startup_combo.removeItem(combo_index)
            self._syncing = syncing

    def history_cleared(self) -> None:
        self._select_startup_choice()

    # ── Startup ──

    def _select_startup_choice(self) -> None:
        """Point the startup combo at the stored preference, without writing it back."""
        choice = self._ctx.file_prefs.launch_at_startup
        syncing, self._syncing = self._syncing, True
        for i in range(self._startup_combo.count()):
            if self._startup_combo.itemData(i) == choice:
                self._startup_combo.setCurrentIndex(i)
                break
        self._syncing = syncing

    def _on_startup_changed(self, index: int) -> None:
        if self._syncing or index < 0:
            return
        choice = self._startup_combo.itemData(index)
        if choice:
            self._ctx.file_prefs.launch_at_startup = choice

    def _on_browse_essential(self) -> None:
        path = QFileDialog.getExistingDirectory(self, t("prefs.choose_essential_path"))
        if path:
            self._ctx.file_prefs.essential_path = path
            self._essential_card.setContent(path)

    # ── Backups ──

    def _on_frequency_changed(self, index: int) -> None:
        value = self._frequency_combo.itemData(index)
        if value:
            self._ctx.backup_policy.frequency = BackupFrequency(value)

    def _on_days_changed(self, value: int) -> None:
        self._ctx.backup_policy.days_between_backups = value

    def _on_keep_changed(self, value: int) -> None:
        self._ctx.config.backups_to_keep = value

    def _on_browse_backup_folder(self) -> None:
        path = QFileDialog.getExistingDirectory(self, t("prefs.choose_backup_folder"))
        if path:
            self._ctx.config.backup_folder = Path(path)
            self._backup_folder_card.setContent(path)

    # ── Recent files ──

    def _on_max_slider_changed(self, value: int) -> None:
        result = self._ctx.file_prefs.set_recent_files_max(value)
        if self._max_edit.text().strip() != str(result):
            self._max_edit.setText(str(result))

    def _on_max_text_changed(self) -> None:
        text = self._max_edit.text().strip()
        try:
            value = int(text)
        except ValueError:
            show_error(self, t("prefs.recent_files_max"), t("prefs.max_not_numeric"))
            self._max_edit.setText(str(self._max_slider.value()))
            return
        if not 1 <= value <= RECENT_FILES_MAX_LIMIT:
            show_error(self, t("prefs.recent_files_max"), t("prefs.max_out_of_range", limit=RECENT_FILES_MAX_LIMIT))
            self._max_edit.setText(str(self._max_slider.value()))
            return
        if value != self._max_slider.value():
            self._max_slider.setValue(value)

    def _stored_purge_index(self) -> int:
        return _PURGE_AT_STARTUP if self._ctx.file_prefs.purge_at_startup else _PURGE_NEVER

    def _on_purge_changed(self, index: int) -> None:
        if self._syncing:
            return
        if index == _PURGE_NOW:
            count = self._ctx.file_prefs.purge_now()
            show_success(self, t("prefs.purge_inaccessible"), t("prefs.purged_n", count=count))
            self._syncing = True
            self._purge_combo.setCurrentIndex(self._stored_purge_index())
            self._syncing = False
        else:
            self._ctx.file_prefs.purge_at_startup = index == _PURGE_AT_STARTUP

    # ── Language ──

    def _on_language_changed(self, index: int) -> None:
        lang = self._lang_combo.itemData(index)
        if lang and lang != self._ctx.config.language:
            self._ctx.config.language = lang
