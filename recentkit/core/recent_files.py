"""Recent files — a bounded, most-recent-first list of opened files.

The list is the single source of truth. Menus, combo boxes and other
mirrors subscribe as :class:`RecentFilesListener` and receive every
structural edit (insert at index, remove at index, history cleared) in
order, so they stay index-aligned with the list.

An application that tracks several independent lists gives each one a
qualifier, which prefixes its preference keys.
"""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Protocol

from loguru import logger

from recentkit.data import recent_store
from recentkit.models.file_spec import FileSpec

if TYPE_CHECKING:
    from recentkit.config import Config

DEFAULT_RECENT_FILES_MAX = 5
RECENT_FILES_MAX_LIMIT = 25


class RecentFilesListener(Protocol):
    """Receives structural edits of a RecentFiles list."""

    def file_inserted(self, index: int, spec: FileSpec) -> None: ...

    def file_removed(self, index: int) -> None: ...

    def history_cleared(self) -> None: ...


class FileSpecOpener(Protocol):
    """Host application capability: open a file picked from the list."""

    def handle_open_file(self, spec: FileSpec) -> None: ...


class FileSelectionMode(StrEnum):
    """What kind of path the user may choose to open."""

    FILES_ONLY = "files-only"
    DIRECTORIES_ONLY = "directories-only"
    FILES_AND_DIRECTORIES = "files-and-directories"

    def accepts(self, path: Path) -> bool:
        if self is FileSelectionMode.FILES_ONLY:
            return path.is_file()
        if self is FileSelectionMode.DIRECTORIES_ONLY:
            return path.is_dir()
        return True


class RecentFiles:
    """Files recently accessed by an application, most recent first."""

    def __init__(
        self,
        config: Config,
        qualifier: str = "",
        opener: FileSpecOpener | None = None,
        selection_mode: FileSelectionMode = FileSelectionMode.DIRECTORIES_ONLY,
    ) -> None:
        self._config = config
        self._qualifier = recent_store.normalize_qualifier(qualifier)
        self._max = DEFAULT_RECENT_FILES_MAX
        self._files: list[FileSpec] = []
        self._listeners: list[RecentFilesListener] = []
        self.opener = opener
        self.selection_mode = selection_mode

    @property
    def qualifier(self) -> str:
        return self._qualifier

    @property
    def max(self) -> int:
        return self._max

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[FileSpec]:
        return iter(list(self._files))

    def get(self, index: int) -> FileSpec | None:
        """Entry at *index*, or None if there is none."""
        if 0 <= index < len(self._files):
            return self._files[index]
        return None

    def find(self, path: str) -> int:
        """Index of the entry with *path*, or -1."""
        for i, spec in enumerate(self._files):
            if spec.path == path:
                return i
        return -1

    # ── Listeners ──

    def subscribe(self, listener: RecentFilesListener) -> None:
        """Register a mirror; current entries are replayed to it as inserts."""
        if listener in self._listeners:
            return
        self._listeners.append(listener)
        for i, spec in enumerate(self._files):
            listener.file_inserted(i, spec)

    def unsubscribe(self, listener: RecentFilesListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_inserted(self, index: int, spec: FileSpec) -> None:
        for listener in list(self._listeners):
            listener.file_inserted(index, spec)

    def _notify_removed(self, index: int) -> None:
        for listener in list(self._listeners):
            listener.file_removed(index)

    # ── Persistence ──

    def load_from_prefs(self) -> None:
        """Load the recent files from the user's preferences, in stored order."""
        self.set_max(self._config.get_pref_as_int(recent_store.RECENT_FILES_MAX, DEFAULT_RECENT_FILES_MAX))
        for number in range(self._max):
            spec = recent_store.load_slot(self._config, self._qualifier, number)
            if not spec.has_path():
                continue
            if self.find(spec.path) >= 0:
                logger.debug(f"Skipping duplicate recent file in slot {number}: {spec.path}")
                continue
            self._files.append(spec)
            self._notify_inserted(len(self._files) - 1, spec)
        logger.debug(f"Loaded {len(self._files)} recent file(s) for {self._qualifier or 'default'} list")

    def save_prefs(self) -> None:
        """Save the recent files, re-numbering the slots from zero."""
        with self._config.batch_update():
            self._config.set_pref(recent_store.RECENT_FILES_MAX, self._max)
            count = 0
            for spec in self._files:
                if spec.has_path():
                    recent_store.save_slot(self._config, self._qualifier, count, spec)
                    count += 1
            for number in range(count, self._max):
                recent_store.clear_slot(self._config, self._qualifier, number)

    # ── Adding ──

    def add_recent_path(self, kind: str, path: str, format: str = "") -> FileSpec | None:
        """Add a file, url or other data store that's just been used."""
        return self.add_recent_file(FileSpec(path=path, kind=kind, format=format))

    def add_recent_file_path(self, path: str | Path) -> FileSpec | None:
        """Add a local file or folder that's just been used."""
        return self.add_recent_file(FileSpec.from_path(path))

    def add_recent_file(self, spec: FileSpec) -> FileSpec | None:
        """Add a file that's just been used to the top of the list.

        Older entries for the same path are merged into *spec* and dropped.

        Returns:
            The entry now at the top of the list, or None if *spec* has no path.
        """
        if not spec.has_path():
            logger.warning("Ignoring recent file without a path")
            return None
        self._insert(spec, 0)
        return self.get(0)

    def add_not_so_recent_file(self, spec: FileSpec) -> FileSpec | None:
        """Add a file near the top without replacing the file currently on top.

        Returns:
            *spec* after merging, or None if it has no path or didn't fit.
            This is the added entry, not the one on top of the list.
        """
        if not spec.has_path():
            logger.warning("Ignoring recent file without a path")
            return None
        position = self._insert(spec, 1)
        return spec if position < len(self._files) else None

    def _insert(self, spec: FileSpec, position: int) -> int:
        """Insert, then drop duplicates of *spec* and anything past the maximum."""
        position = min(position, len(self._files))
        self._files.insert(position, spec)
        self._notify_inserted(position, spec)

        i = 0
        while i < len(self._files):
            if i != position and self._files[i].path == spec.path:
                spec.merge(self._files[i])
                self.remove_file(i)
                if i < position:
                    position -= 1
            elif i >= self._max:
                self.remove_file(i)
            else:
                i += 1

        self.save_prefs()
        return position

    # ── Removing ──

    def remove_file(self, index: int) -> None:
        """Remove the entry at *index*; out-of-range indexes are ignored."""
        if not 0 <= index < len(self._files):
            return
        spec = self._files.pop(index)
        logger.debug(f"Removed recent file {index}: {spec.path}")
        self._notify_removed(index)

    def purge_inaccessible_files(self) -> int:
        """Drop every entry whose file no longer exists.

        Returns:
            The number of entries removed.
        """
        removed = 0
        i = 0
        while i < len(self._files):
            if self._files[i].exists():
                i += 1
            else:
                self.remove_file(i)
                removed += 1
        if removed:
            logger.info(f"Purged {removed} inaccessible recent file(s)")
            self.save_prefs()
        return removed

    def set_max(self, max_files: int) -> None:
        """Set the number of recent files to retain, trimming the oldest entries."""
        if not 1 <= max_files <= RECENT_FILES_MAX_LIMIT:
            logger.debug(f"Ignoring recent files maximum out of range: {max_files}")
            return
        self._max = max_files
        while len(self._files) > max_files:
            self.remove_file(len(self._files) - 1)

    def clear_history(self) -> None:
        """Forget everything but the most recent file."""
        while len(self._files) > 1:
            self.remove_file(len(self._files) - 1)
        with self._config.batch_update():
            for number in range(1, self._max):
                recent_store.clear_slot(self._config, self._qualifier, number)
        for listener in list(self._listeners):
            listener.history_cleared()

    # ── Opening ──

    def open_recent(self, path: str) -> FileSpec | None:
        """Open an entry picked from the recent files menu, if it still exists.

        The entry moves to the top of the list.
        """
        index = self.find(path)
        if index < 0:
            return None
        spec = self._files[index]
        if not spec.exists():
            logger.warning(f"Recent file is no longer available: {path}")
            return None
        spec.touch()
        spec = self.add_recent_file(spec)
        if spec and self.opener:
            self.opener.handle_open_file(spec)
        return spec

    def open_path(self, path: str | Path) -> FileSpec | None:
        """Open a path chosen by the user, remembering it as the most recent file."""
        chosen = Path(path)
        if not (chosen.exists() and os.access(chosen, os.R_OK) and self.selection_mode.accepts(chosen)):
            logger.error(f"Trouble opening file {chosen}")
            return None
        spec = self.add_recent_file_path(chosen)
        if spec and self.opener:
            self.opener.handle_open_file(spec)
        return spec
