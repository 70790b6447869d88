from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QMessageBox, QWidget


class QtNotifier(QObject):
    """NotifierPort for the GUI.

    ``notify`` may be called from the worker thread; the message box is
    always shown on the thread that owns this object.
    """

    _notice = Signal(str, str)

    def __init__(self, parent_widget: Optional[QWidget] = None) -> None:
        super().__init__()
        self._parent_widget = parent_widget
        self._notice.connect(self._show)

    def notify(self, title: str, message: str) -> None:
        self._notice.emit(title, message)

    @Slot(str, str)
    def _show(self, title: str, message: str) -> None:
        QMessageBox.information(self._parent_widget, title, message)
