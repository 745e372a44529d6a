"""UI helpers — notifications and questions shown over a window."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget
from qfluentwidgets import InfoBar, InfoBarPosition, MessageBox

# Milliseconds each kind of notification stays up
_DURATIONS = {"success": 3000, "warning": 4000, "error": 5000}


def _notify(kind: str, parent: QWidget, title: str, content: str) -> None:
    getattr(InfoBar, kind)(
        title=title,
        content=content,
        orient=Qt.Orientation.Vertical,
        isClosable=True,
        position=InfoBarPosition.TOP_RIGHT,
        duration=_DURATIONS[kind],
        parent=parent,
    )


def show_success(parent: QWidget, title: str, content: str = "") -> None:
    _notify("success", parent, title, content)


def show_warning(parent: QWidget, title: str, content: str = "") -> None:
    _notify("warning", parent, title, content)


def show_error(parent: QWidget, title: str, content: str = "") -> None:
    """Errors stay up longest."""
    _notify("error", parent, title, content)


def ask_yes_no(parent: QWidget, title: str, content: str, yes: str, no: str) -> bool:
    """Blocking yes/no question; True if the user chose *yes*."""
    box = MessageBox(title, content, parent)
    box.yesButton.setText(yes)
    box.cancelButton.setText(no)
    return bool(box.exec())
