"""Application context — service container for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recentkit.config import Config
    from recentkit.core.backup_policy import BackupPolicy
    from recentkit.core.backup_writer import BackupWriter
    from recentkit.core.file_prefs import FilePrefs
    from recentkit.core.recent_files import RecentFiles


@dataclass
class AppContext:
    """
    Central service container.

    Built once by the composition root and handed to every page, so the
    preferences and backup policy are shared without module-level singletons.
    """

    config: Config
    recent_files: RecentFiles
    file_prefs: FilePrefs
    backup_policy: BackupPolicy
    backup_writer: BackupWriter
