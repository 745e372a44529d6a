"""File preferences — what to open at startup, when to purge, how many recent files."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from recentkit.core.recent_files import RECENT_FILES_MAX_LIMIT
from recentkit.models.file_spec import FileSpec

if TYPE_CHECKING:
    from recentkit.config import Config
    from recentkit.core.recent_files import RecentFiles

NO_FILE = "no-file"
LAST_FILE_OPENED = "last-file-opened"


class PurgeChoice(StrEnum):
    NEVER = "never"
    AT_STARTUP = "at-startup"


class FilePrefs:
    """User preferences about files, backed by the shared Config."""

    def __init__(self, config: Config, recent_files: RecentFiles | None = None) -> None:
        self._config = config
        self._recent_files = recent_files

    @property
    def recent_files(self) -> RecentFiles | None:
        return self._recent_files

    @recent_files.setter
    def recent_files(self, value: RecentFiles) -> None:
        self._recent_files = value

    # ── Startup ──

    @property
    def launch_at_startup(self) -> str:
        """``no-file``, ``last-file-opened`` or an explicit path."""
        value = self._config.launch_at_startup.strip()
        if value.lower() in (NO_FILE, LAST_FILE_OPENED):
            return value.lower()
        return value

    @launch_at_startup.setter
    def launch_at_startup(self, value: str) -> None:
        self._config.launch_at_startup = value or NO_FILE

    def startup_file_path(self) -> str:
        """Path of the file to open automatically at startup, or an empty string."""
        choice = self.launch_at_startup
        if choice == NO_FILE:
            return ""
        if choice == LAST_FILE_OPENED:
            top = self._recent_files.get(0) if self._recent_files else None
            return top.path if top else ""
        return choice

    def startup_file_spec(self) -> FileSpec | None:
        """The recent-list entry to open at startup, or a fresh spec for an explicit path."""
        path = self.startup_file_path()
        if not path:
            return None
        if self._recent_files:
            index = self._recent_files.find(path)
            if index >= 0:
                return self._recent_files.get(index)
        return FileSpec(path=path)

    def launch_startup_file(self) -> FileSpec | None:
        """Open the preferred startup file, if it's still there."""
        path = self.startup_file_path()
        if not path or self._recent_files is None:
            return None
        if not Path(path).exists():
            logger.info(f"Startup file is not available: {path}")
            return None
        return self._recent_files.open_path(path)

    # ── Purging ──

    @property
    def purge_at_startup(self) -> bool:
        return self._config.purge_inaccessible_files.strip().lower() == PurgeChoice.AT_STARTUP

    @purge_at_startup.setter
    def purge_at_startup(self, value: bool) -> None:
        choice = PurgeChoice.AT_STARTUP if value else PurgeChoice.NEVER
        self._config.purge_inaccessible_files = choice.value

    def apply_startup_purge(self) -> int:
        """Purge inaccessible recent files if the user asked for that at startup."""
        if not self.purge_at_startup:
            return 0
        return self.purge_now()

    def purge_now(self) -> int:
        if self._recent_files is None:
            return 0
        return self._recent_files.purge_inaccessible_files()

    # ── Misc ──

    @property
    def essential_path(self) -> str:
        return self._config.essential_path

    @essential_path.setter
    def essential_path(self, value: str) -> None:
        self._config.essential_path = value

    @property
    def recent_files_max(self) -> int:
        if self._recent_files is not None:
            return self._recent_files.max
        return self._config.recent_files_max

    def set_recent_files_max(self, value: int) -> int:
        """Change how many recent files are kept, if *value* is in range.

        Returns:
            The resulting maximum.
        """
        if value == self.recent_files_max or not 1 <= value <= RECENT_FILES_MAX_LIMIT:
            return self.recent_files_max
        if self._recent_files is not None:
            self._recent_files.set_max(value)
            self._recent_files.save_prefs()
        else:
            self._config.recent_files_max = value
        return value
