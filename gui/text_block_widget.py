"""Qt face of an ``OverlayElement``: a draggable, zoomable, editable text block."""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QFocusEvent, QKeyEvent, QMouseEvent, QWheelEvent
from PySide6.QtWidgets import QFrame, QLabel, QLineEdit, QStackedLayout, QWidget

from domain.errors import InvalidTransition
from engine.overlay_element import ElementState, OverlayElement
from gui.qt_measurer import overlay_font
from gui.styles import block_stylesheet


class _BlockEditor(QLineEdit):
    """Single-line editor that reports focus loss and Esc separately."""

    focus_lost = Signal()
    cancelled = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("text_block_editor")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setFrame(False)
        self.setClearButtonEnabled(False)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape:
            self.cancelled.emit()
            event.accept()
            return
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.clearFocus()
            event.accept()
            return
        super().keyPressEvent(event)

    def focusOutEvent(self, event: QFocusEvent) -> None:
        super().focusOutEvent(event)
        self.focus_lost.emit()


class TextBlockWidget(QFrame):
    """Mirrors its element after every event; the element owns all state."""

    changed = Signal()

    def __init__(self, element: OverlayElement, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._element = element
        self.setObjectName("text_block")
        self.setMouseTracking(True)

        self._label = QLabel(element.text)
        self._label.setObjectName("text_block_label")
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setTextFormat(Qt.TextFormat.PlainText)
        self._label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

        self._editor = _BlockEditor()
        self._editor.textEdited.connect(self._on_text_edited)
        self._editor.focus_lost.connect(self._on_focus_lost)
        self._editor.cancelled.connect(self._on_cancelled)

        self._stack = QStackedLayout(self)
        self._stack.setContentsMargins(0, 0, 0, 0)
        self._stack.addWidget(self._label)
        self._stack.addWidget(self._editor)

        self.sync()

    @property
    def element(self) -> OverlayElement:
        return self._element

    # -----------------------------------------------------------------------
    # Element → widget
    # -----------------------------------------------------------------------

    def sync(self) -> None:
        element = self._element
        bounds = element.bounds
        self.setGeometry(int(round(bounds.left)), int(round(bounds.top)),
                         int(round(bounds.width)), int(round(bounds.height)))

        font = overlay_font(element.font_size)
        self._label.setFont(font)
        self._editor.setFont(font)
        self._label.setText(element.text)

        editing = element.state is ElementState.EDITING
        if editing:
            width, height = element.edit_size
            self._editor.setFixedSize(int(round(width)), int(round(height)))
            self._stack.setCurrentWidget(self._editor)
            self.setCursor(Qt.CursorShape.IBeamCursor)
        else:
            self._editor.setMinimumSize(0, 0)
            self._editor.setMaximumSize(16777215, 16777215)
            self._stack.setCurrentWidget(self._label)
            self.setCursor(Qt.CursorShape.OpenHandCursor)

        self.setStyleSheet(block_stylesheet(element.highlighted))

    def _pointer(self, event: QMouseEvent) -> tuple[float, float]:
        pos = self.mapToParent(event.position().toPoint())
        return float(pos.x()), float(pos.y())

    # -----------------------------------------------------------------------
    # Qt events → element transitions
    # -----------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        if self._element.press(self._pointer(event), click_count=1):
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseDoubleClickEvent(event)
            return
        self._element.release()
        if self._element.press(self._pointer(event), click_count=2):
            self._editor.setText(self._element.edited_text)
            self.changed.emit()
            self._editor.setFocus(Qt.FocusReason.MouseFocusReason)
            self._editor.selectAll()
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._element.move(self._pointer(event)):
            x, y = self._element.position
            self.move(QPoint(int(round(x)), int(round(y))))
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton and self._element.release():
            self.sync()
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        if not event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            event.ignore()
            return
        if self._element.zoom(event.angleDelta().y()):
            self.sync()
        event.accept()

    def enterEvent(self, event) -> None:
        self._element.hovered = True
        self.setStyleSheet(block_stylesheet(self._element.highlighted))
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:
        self._element.hovered = False
        self.setStyleSheet(block_stylesheet(self._element.highlighted))
        super().leaveEvent(event)

    # -----------------------------------------------------------------------
    # Editor slots
    # -----------------------------------------------------------------------

    def _on_text_edited(self, text: str) -> None:
        if self._element.state is ElementState.EDITING:
            self._element.set_edited_text(text)

    def _on_focus_lost(self) -> None:
        try:
            self._element.commit_edit()
        except InvalidTransition:
            # Already closed by the controller or by Esc.
            return
        self.changed.emit()

    def _on_cancelled(self) -> None:
        try:
            self._element.cancel_edit()
        except InvalidTransition:
            return
        self._editor.setText(self._element.text)
        self.changed.emit()
