"""Application configuration — JSON-based user preferences, with file locking and batch update support."""

from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

_instance: "Config | None" = None

# Default data directory
_DEFAULT_DATA_DIR = Path.home() / "Documents" / "RecentKit"


def get_config() -> Config:
    """Module-level factory — single global Config instance."""
    global _instance
    if _instance is None:
        _instance = Config()
    return _instance


def reset_config() -> None:
    """Reset the global config instance (for testing)."""
    global _instance
    _instance = None


class Config:
    """JSON-based user preferences with file locking.

    Preference keys are flat strings such as ``recent-files-max`` or
    ``notes-recent-file-0``. A failed write is logged and the values stay
    in memory.
    """

    _DEFAULTS: dict[str, Any] = {
        "language": "en_US",
        "theme": "auto",
        "recent-files-max": 5,
        # Backups
        "backup-frequency": "occasional-backups",
        "days-between-backups": 7,
        "backups-to-keep": 10,
        "backup-folder": "",
        # Startup
        "launch-at-startup": "last-file-opened",
        "purge-inaccessible-files": "never",
        "essential-path": "",
    }

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = data_dir or _DEFAULT_DATA_DIR
        self._path = self._dir / "config.json"
        self._lock = threading.Lock()
        self._batch_depth = 0
        self._load()

    def _load(self) -> None:
        """Load config from disk over the defaults."""
        self._data = dict(self._DEFAULTS)
        if self._path.exists():
            try:
                with open(self._path, encoding="utf-8") as f:
                    user_data = json.load(f)
                if isinstance(user_data, dict):
                    self._data.update(user_data)
                else:
                    logger.warning(f"Ignoring config with unexpected layout: {self._path}")
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Failed to load config, using defaults: {e}")

    def _save(self) -> None:
        """Persist config to disk with file locking."""
        if self._batch_depth:
            return
        with self._lock:
            tmp_path = self._path.with_suffix(".tmp")
            try:
                self._dir.mkdir(parents=True, exist_ok=True)
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save config: {e}")
                if tmp_path.exists():
                    tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Context manager for batching multiple config changes into a single write.

        Blocks may nest; only the outermost one writes.
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            self._save()

    # ── Preference access ──

    def get_pref(self, key: str, default: str = "") -> str:
        """Get a flat preference as a string."""
        value = self._data.get(key)
        if value is None:
            return default
        return str(value)

    def get_pref_as_int(self, key: str, default: int) -> int:
        """Get a flat preference as an int, falling back to *default* if it isn't one."""
        value = self._data.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.debug(f"Preference {key!r} is not an integer: {value!r}")
            return default

    def set_pref(self, key: str, value: Any) -> None:
        """Set a flat preference."""
        self._data[key] = value
        self._save()

    def has_pref(self, key: str) -> bool:
        return key in self._data

    # ── Typed properties ──

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def language(self) -> str:
        return self.get_pref("language", "en_US")

    @language.setter
    def language(self, value: str) -> None:
        self.set_pref("language", value)

    @property
    def recent_files_max(self) -> int:
        return self.get_pref_as_int("recent-files-max", 5)

    @recent_files_max.setter
    def recent_files_max(self, value: int) -> None:
        self.set_pref("recent-files-max", value)

    @property
    def backup_frequency(self) -> str:
        return self.get_pref("backup-frequency", "occasional-backups")

    @backup_frequency.setter
    def backup_frequency(self, value: str) -> None:
        self.set_pref("backup-frequency", str(value))

    @property
    def days_between_backups(self) -> int:
        return self.get_pref_as_int("days-between-backups", 7)

    @days_between_backups.setter
    def days_between_backups(self, value: int) -> None:
        self.set_pref("days-between-backups", value)

    @property
    def backups_to_keep(self) -> int:
        return self.get_pref_as_int("backups-to-keep", 10)

    @backups_to_keep.setter
    def backups_to_keep(self, value: int) -> None:
        self.set_pref("backups-to-keep", value)

    @property
    def backup_folder(self) -> Path | None:
        raw = self.get_pref("backup-folder", "")
        return Path(raw) if raw else None

    @backup_folder.setter
    def backup_folder(self, value: Path | None) -> None:
        self.set_pref("backup-folder", str(value) if value else "")

    @property
    def launch_at_startup(self) -> str:
        return self.get_pref("launch-at-startup", "last-file-opened")

    @launch_at_startup.setter
    def launch_at_startup(self, value: str) -> None:
        self.set_pref("launch-at-startup", value)

    @property
    def purge_inaccessible_files(self) -> str:
        return self.get_pref("purge-inaccessible-files", "never")

    @purge_inaccessible_files.setter
    def purge_inaccessible_files(self, value: str) -> None:
        self.set_pref("purge-inaccessible-files", value)

    @property
    def essential_path(self) -> str:
        return self.get_pref("essential-path", "")

    @essential_path.setter
    def essential_path(self, value: str) -> None:
        self.set_pref("essential-path", value)

    @property
    def theme(self) -> str:
        return self.get_pref("theme", "auto")

    @theme.setter
    def theme(self, value: str) -> None:
        self.set_pref("theme", value)
