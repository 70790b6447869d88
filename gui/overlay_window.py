"""Transparent always-on-top window that sits exactly over the captured region."""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QCloseEvent, QGuiApplication, QKeyEvent, QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QLabel, QWidget

from domain.models import OverlayResult, Rect, TextBlockPlacement
from engine.coordinates import screen_to_logical
from engine.log import get_logger
from engine.overlay_controller import OverlayController
from engine.overlay_element import MAX_FONT_SIZE, MIN_FONT_SIZE
from engine.text_fit import select_strategy
from gui.qt_measurer import QtTextMeasurer
from gui.styles import SURFACE_BACKGROUND, apply_shadow
from gui.text_block_widget import TextBlockWidget
from gui.worker import PipelineController
from use_cases.overlay_translate import OverlayTranslateUseCase

logger = get_logger("overlay_window")


class ScreenOverlayWindow(QWidget):
    """Hosts one ``OverlayController`` and a widget per text block.

    Empty canvas: click ends editing and drags the window, double-click
    closes. Esc closes, T toggles between translation and the original.
    """

    closed = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._controller = OverlayController()
        self._pipeline = PipelineController(self)
        self._fit = select_strategy("live", QtTextMeasurer())
        self._widgets: List[TextBlockWidget] = []
        self._showing_translated = True

        self._status = QLabel("", self)
        self._status.setObjectName("overlay_status")
        self._status.setStyleSheet("background: #fdfdfd; color: #0d0d0d; padding: 2px 6px;")
        self._status.hide()

    @property
    def controller(self) -> OverlayController:
        return self._controller

    @property
    def text_blocks(self) -> List[TextBlockWidget]:
        return list(self._widgets)

    # -----------------------------------------------------------------------
    # Pipeline
    # -----------------------------------------------------------------------

    def start(self, use_case: OverlayTranslateUseCase) -> None:
        worker = self._pipeline.prepare(use_case)
        if worker is None:
            return
        worker.started_processing.connect(self._on_processing)
        worker.result_ready.connect(self.show_result)
        worker.error.connect(self._on_error)
        worker.finished.connect(self._status.hide)
        self._pipeline.launch()

    def _on_processing(self) -> None:
        self._status.setText("Translating...")
        self._status.adjustSize()
        self._status.show()

    def _on_error(self, message: str) -> None:
        logger.error(f"Overlay pipeline error: {message}")

    def show_result(self, result: OverlayResult) -> None:
        if result.screen_bounds is not None:
            self.set_screen_bounds(result.screen_bounds)
        self.populate(result.placements)

    # -----------------------------------------------------------------------
    # Geometry
    # -----------------------------------------------------------------------

    def set_screen_bounds(self, screen_bounds: Rect) -> None:
        """Cover *screen_bounds* (physical pixels) exactly."""
        if screen_bounds.width <= 0 or screen_bounds.height <= 0:
            return
        screen = (
            QGuiApplication.screenAt(QPoint(int(screen_bounds.left), int(screen_bounds.top)))
            or QGuiApplication.primaryScreen()
        )
        ratio = screen.devicePixelRatio() if screen is not None else 1.0
        logical = screen_to_logical(screen_bounds, (0, 0), ratio, ratio)
        self.setGeometry(
            int(round(logical.left)), int(round(logical.top)),
            max(1, int(round(logical.width))), max(1, int(round(logical.height))),
        )
        self._controller.set_container_size((float(self.width()), float(self.height())))

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._controller.set_container_size((float(self.width()), float(self.height())))
        self._sync_all()

    # -----------------------------------------------------------------------
    # Text blocks
    # -----------------------------------------------------------------------

    def populate(self, placements: Sequence[TextBlockPlacement]) -> None:
        """Replace all text blocks with one per placement."""
        self._clear_widgets()
        fitted = [
            replace(p, font_size=self._fit.fit(p.text, p.bounds, MIN_FONT_SIZE, MAX_FONT_SIZE).font_size)
            for p in placements
        ]
        elements = self._controller.populate(fitted, (float(self.width()), float(self.height())))
        for element in elements:
            widget = TextBlockWidget(element, self)
            widget.changed.connect(self._sync_all)
            apply_shadow(widget)
            widget.setVisible(self._showing_translated)
            self._widgets.append(widget)
        logger.info(f"Showing {len(self._widgets)} text block(s)")

    def _sync_all(self) -> None:
        for widget in self._widgets:
            widget.sync()

    def _clear_widgets(self) -> None:
        for widget in self._widgets:
            widget.hide()
            widget.deleteLater()
        self._widgets.clear()

    def toggle_translation(self) -> None:
        self._controller.end_all_edits()
        self._showing_translated = not self._showing_translated
        for widget in self._widgets:
            widget.sync()
            widget.setVisible(self._showing_translated)

    # -----------------------------------------------------------------------
    # Canvas events
    # -----------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), SURFACE_BACKGROUND)
        painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self._controller.end_all_edits()
        self._sync_all()
        self.setFocus()
        if event.button() == Qt.MouseButton.LeftButton and self.windowHandle() is not None:
            self.windowHandle().startSystemMove()
        event.accept()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.close()
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key.Key_Escape:
            self.close()
        elif event.key() == Qt.Key.Key_T:
            self.toggle_translation()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._pipeline.cancel()
        self._clear_widgets()
        self._controller.close()
        self.closed.emit()
        super().closeEvent(event)
