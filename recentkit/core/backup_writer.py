"""Backup writer — ZIP backups of a recent file or folder, with rotation."""

from __future__ import annotations

import zipfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from recentkit.config import Config
    from recentkit.models.file_spec import FileSpec

BACKUP_DATE_FORMAT = "%Y-%m-%d-%H-%M"
BACKUP_MARKER = " backup "


def backup_date(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(BACKUP_DATE_FORMAT)


def backup_name_prefix(primary: Path) -> str:
    """Enclosing folder plus file name, e.g. ``notes todo.txt``."""
    parts = [p for p in primary.parts[-2:] if p not in ("/", "\\", primary.anchor)]
    return " ".join(parts)


def backup_file_name(primary: Path, ext: str, now: datetime | None = None) -> str:
    """Suggested name for a backup of *primary*.

    Example: ``/home/me/notes/todo.txt`` → ``notes todo.txt backup 2026-10-19-14-30.zip``
    """
    name = f"{backup_name_prefix(primary)}{BACKUP_MARKER}{backup_date(now)}"
    if ext and not ext.startswith("."):
        ext = "." + ext
    return name + ext


class BackupWriter:
    """Writes versioned ZIP backups next to each other in a backup folder."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def default_folder(self, spec: FileSpec) -> Path:
        """The spec's own backup folder, else the configured one, else the data dir."""
        if spec.backup_folder:
            return Path(spec.backup_folder)
        return self._config.backup_folder or self._config.data_dir / "backups"

    def backup(self, spec: FileSpec, folder: Path | None = None) -> Path | None:
        """Back up a spec's file or folder into *folder* under a generated name."""
        folder = folder or self.default_folder(spec)
        source = spec.file
        if source is None:
            return None
        zip_path = folder / backup_file_name(source, ".zip")
        if self.write_backup(source, zip_path) is None:
            return None
        spec.backup_folder = str(folder)
        self.rotate(folder, source)
        return zip_path

    def write_backup(self, source: Path, zip_path: Path) -> int | None:
        """Write a file, or a folder tree, into a ZIP archive.

        Returns:
            The number of files written, or None on failure.
        """
        if not source.exists():
            logger.error(f"Nothing to back up, {source} does not exist")
            return None
        count = 0
        try:
            zip_path.parent.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
                if source.is_dir():
                    for child in sorted(source.rglob("*")):
                        if child.is_file():
                            zf.write(child, f"{source.name}/{child.relative_to(source).as_posix()}")
                            count += 1
                else:
                    zf.write(source, source.name)
                    count = 1
        except OSError as e:
            logger.error(f"Failed to write backup {zip_path}: {e}")
            zip_path.unlink(missing_ok=True)
            return None

        logger.info(f"Created backup: {zip_path.name} ({count} file(s))")
        return count

    def list_backups(self, folder: Path, primary: Path) -> list[Path]:
        """Existing backups of *primary* in *folder*, newest first."""
        if not folder.is_dir():
            return []
        prefix = backup_name_prefix(primary) + BACKUP_MARKER
        found = [p for p in folder.glob("*.zip") if p.name.startswith(prefix)]
        # Timestamped names sort chronologically
        return sorted(found, key=lambda p: p.name, reverse=True)

    def rotate(self, folder: Path, primary: Path) -> None:
        """Remove the oldest backups of *primary* beyond the number to keep."""
        keep = self._config.backups_to_keep
        if keep < 1:
            return
        backups = self.list_backups(folder, primary)
        while len(backups) > keep:
            oldest = backups.pop()  # newest-first, so last = oldest
            try:
                oldest.unlink(missing_ok=True)
                logger.debug(f"Rotated old backup: {oldest.name}")
            except OSError as e:
                logger.warning(f"Failed to rotate backup: {e}")
