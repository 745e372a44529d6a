"""Application entry point — wires services and launches the UI."""

from __future__ import annotations

import sys

from PySide6.QtCore import QLocale
from PySide6.QtWidgets import QApplication

from recentkit.config import get_config
from recentkit.context import AppContext
from recentkit.core.backup_policy import BackupPolicy
from recentkit.core.backup_writer import BackupWriter
from recentkit.core.file_prefs import FilePrefs
from recentkit.core.recent_files import RecentFiles
from recentkit.i18n import set_language
from recentkit.logger import setup_logger
from recentkit.ui.main_window import MainWindow
from recentkit.ui.theme import apply_theme


def create_context(verbose: bool = False) -> AppContext:
    """Wire all services and return an AppContext."""
    config = get_config()

    # Logger
    setup_logger(config.data_dir / "logs", verbose=verbose)

    # Recent files
    recent_files = RecentFiles(config)
    recent_files.load_from_prefs()
    file_prefs = FilePrefs(config, recent_files)
    file_prefs.apply_startup_purge()

    # Backups (the window attaches itself as the host application)
    backup_policy = BackupPolicy(config)
    backup_writer = BackupWriter(config)

    return AppContext(
        config=config,
        recent_files=recent_files,
        file_prefs=file_prefs,
        backup_policy=backup_policy,
        backup_writer=backup_writer,
    )


def main() -> int:
    """Application entry point."""
    app = QApplication(sys.argv)
    app.setApplicationName("RecentKit")
    app.setOrganizationName("RecentKit")

    # Wire services
    ctx = create_context(verbose="--verbose" in sys.argv)

    # Apply theme and language from config
    apply_theme(ctx.config.theme)
    set_language(ctx.config.language, QLocale.system().name())

    # Create and show main window
    window = MainWindow(ctx)
    window.show()

    # Open the user's preferred file, now that there is a window to show it
    ctx.file_prefs.launch_startup_file()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
