"""Backup policy — decides when to suggest or perform a backup of the current file."""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING, Callable, Protocol

from loguru import logger

from recentkit.data import recent_store

if TYPE_CHECKING:
    from recentkit.config import Config
    from recentkit.core.recent_files import RecentFiles
    from recentkit.models.file_spec import FileSpec


class BackupFrequency(StrEnum):
    """How eagerly backups are made."""

    MANUAL = "manual-backups"
    OCCASIONAL = "occasional-backups"
    AUTOMATIC = "automatic-backups"

    @classmethod
    def from_pref(cls, value: str) -> BackupFrequency:
        """Parse a stored preference; anything unknown means occasional."""
        lowered = value.strip().lower()
        for member in cls:
            if member.value == lowered:
                return member
        return cls.OCCASIONAL


class AppToBackup(Protocol):
    """Host application capability: actually make a backup."""

    def prompt_for_backup(self) -> bool:
        """Ask the user where to back up, then back up. True on success."""
        ...

    def backup_without_prompt(self) -> bool:
        """Back up to the usual place without asking. True on success."""
        ...


class BackupSuggester(Protocol):
    """Asks the user whether a suggested backup is wanted."""

    def suggest_backup(self) -> bool: ...


def _local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def days_between(last: datetime, now: datetime) -> int:
    """Count calendar days from *last* to *now*, one day at a time.

    Only the local dates matter: 23:59 yesterday to 00:01 today is one day.
    Returns 0 when *last* falls on or after the date of *now*.
    """
    day = _local(last).date()
    today = _local(now).date()
    days = 0
    while day < today:
        day += timedelta(days=1)
        days += 1
    return days


class BackupPolicy:
    """Close-time and major-event backup decisions, driven by user preferences."""

    def __init__(
        self,
        config: Config,
        app: AppToBackup | None = None,
        suggester: BackupSuggester | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._app = app
        self._suggester = suggester
        self._clock = clock

    def attach(self, app: AppToBackup, suggester: BackupSuggester | None = None) -> None:
        """Connect the host application once it exists."""
        self._app = app
        self._suggester = suggester

    @property
    def frequency(self) -> BackupFrequency:
        return BackupFrequency.from_pref(self._config.backup_frequency)

    @frequency.setter
    def frequency(self, value: BackupFrequency) -> None:
        self._config.backup_frequency = value.value

    @property
    def days_between_backups(self) -> int:
        return self._config.days_between_backups

    @days_between_backups.setter
    def days_between_backups(self, value: int) -> None:
        self._config.days_between_backups = value

    # ── Decisions ──

    def days_since_backup(self, spec: FileSpec) -> int | None:
        """Calendar days since the last backup, or None if never backed up."""
        if spec.last_backup is None:
            return None
        return days_between(spec.last_backup, self._clock())

    def is_backup_due(self, spec: FileSpec) -> bool:
        days = self.days_since_backup(spec)
        return days is None or days >= self.days_between_backups

    def handle_close(self, spec: FileSpec | None, qualifier: str = "", number: int | None = 0) -> bool:
        """Handle the close of a recent file.

        Returns:
            True if a backup was made.
        """
        return self._decide(spec, qualifier, number, major_event=False)

    def handle_close_current(self, recent_files: RecentFiles) -> bool:
        """Handle the close of whatever file is on top of *recent_files*."""
        return self.handle_close(recent_files.get(0), recent_files.qualifier, 0)

    def handle_major_event(self, spec: FileSpec | None, qualifier: str = "", number: int | None = 0) -> bool:
        """Handle an event that could threaten data integrity.

        In occasional mode a backup is always suggested, however recent the
        last one was.

        Returns:
            True if a backup was made.
        """
        return self._decide(spec, qualifier, number, major_event=True)

    def _decide(self, spec: FileSpec | None, qualifier: str, number: int | None, major_event: bool) -> bool:
        if spec is None or not spec.has_path():
            return False
        if self._app is None:
            logger.warning("No application attached to the backup policy")
            return False

        backed_up = False
        frequency = self.frequency
        if frequency is BackupFrequency.AUTOMATIC:
            backed_up = self._app.backup_without_prompt()
        elif frequency is BackupFrequency.OCCASIONAL:
            if major_event or self.is_backup_due(spec):
                backed_up = self._suggest_backup()
            else:
                logger.debug(f"Backup not due yet for {spec.path}")

        if backed_up:
            self.save_last_backup_date(spec, qualifier, number)
        return backed_up

    def _suggest_backup(self) -> bool:
        """See if the user wants to do a backup now."""
        if self._suggester is not None and not self._suggester.suggest_backup():
            logger.info("Backup suggestion declined")
            return False
        return self._app.prompt_for_backup()

    def save_last_backup_date(self, spec: FileSpec, qualifier: str = "", number: int | None = 0) -> None:
        """Stamp the spec as backed up now and store it in slot *number*.

        A *number* of None stamps the spec without touching any slot.
        """
        spec.last_backup = self._clock()
        if number is not None:
            recent_store.save_slot(self._config, qualifier, number, spec)
        logger.info(f"Backed up {spec.path}")
