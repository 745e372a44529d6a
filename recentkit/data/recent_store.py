"""Recent-file slots — reads and writes FileSpecs in the user preferences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from recentkit.models.file_spec import FileSpec

if TYPE_CHECKING:
    from recentkit.config import Config

RECENT_FILES_MAX = "recent-files-max"
RECENT_FILE = "recent-file"

# Older per-field layouts, still read when no encoded slot exists
RECENT_FILE_TYPE = "recent-file-type"
RECENT_FILE_NAME = "recent-file-name"
RECENT_FILE_FORMAT = "recent-file-format"
RECENT_FILE_DATE = "recent-file-date"
OLD_RECENT_FILE_PREFIX = "recent.file"
GENERIC_BACKUP_FOLDER = "backup-folder"


def normalize_qualifier(qualifier: str) -> str:
    """Make a non-blank qualifier end with a hyphen."""
    if qualifier and not qualifier.endswith("-"):
        return qualifier + "-"
    return qualifier


def slot_key(qualifier: str, number: int, name: str = RECENT_FILE) -> str:
    """Preference key for slot *number*, e.g. ``notes-recent-file-0``."""
    return f"{normalize_qualifier(qualifier)}{name}-{number}"


def load_slot(config: Config, qualifier: str, number: int) -> FileSpec:
    """Load the spec stored in a slot; the result has no path if the slot is empty."""
    spec = FileSpec()
    key = slot_key(qualifier, number)
    if config.has_pref(key):
        spec.set_file_info(config.get_pref(key, ""))
        return spec

    spec.path = config.get_pref(slot_key(qualifier, number, RECENT_FILE_NAME), "")
    if not spec.path:
        spec.path = config.get_pref(f"{OLD_RECENT_FILE_PREFIX}{number}", "")
        if spec.path:
            logger.debug(f"Loaded recent file {number} from legacy key")
        return spec

    spec.kind = config.get_pref(slot_key(qualifier, number, RECENT_FILE_TYPE), "")
    spec.format = config.get_pref(slot_key(qualifier, number, RECENT_FILE_FORMAT), "")
    spec.set_attribute("last-access", config.get_pref(slot_key(qualifier, number, RECENT_FILE_DATE), ""))
    spec.backup_folder = config.get_pref(GENERIC_BACKUP_FOLDER, "")
    logger.debug(f"Loaded recent file {number} from per-field keys")
    return spec


def save_slot(config: Config, qualifier: str, number: int, spec: FileSpec) -> None:
    """Store a spec as one encoded preference."""
    config.set_pref(slot_key(qualifier, number), spec.to_file_info())


def clear_slot(config: Config, qualifier: str, number: int) -> None:
    config.set_pref(slot_key(qualifier, number), "")
