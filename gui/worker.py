"""Background pipeline worker for the overlay window.

Uses QObject + moveToThread() pattern for non-blocking UI.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal, Slot

from domain.cancellation import CancellationToken
from domain.models import OverlayResult
from use_cases.overlay_translate import OverlayTranslateUseCase

logger = logging.getLogger(__name__)


class OverlayWorker(QObject):
    """Runs one capture → translate pipeline in a background thread."""

    # Signals
    started_processing = Signal()
    result_ready = Signal(object)
    finished = Signal()
    error = Signal(str)

    def __init__(self, use_case: OverlayTranslateUseCase) -> None:
        super().__init__()
        self._use_case = use_case
        self._token = CancellationToken()

    def cancel(self) -> None:
        """Thread-safe; in-flight translations are abandoned."""
        self._token.cancel()

    @Slot()
    def run(self) -> None:
        """Runs in the worker thread with its own event loop."""
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            self.started_processing.emit()
            result: OverlayResult = loop.run_until_complete(self._use_case.execute(self._token))
            if not self._token.cancelled:
                self.result_ready.emit(result)
        except Exception as exc:
            logger.exception("Overlay worker crashed")
            self.error.emit(str(exc))
        finally:
            loop.close()
            self.finished.emit()


class PipelineController(QObject):
    """Manages the worker thread lifecycle."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._thread: Optional[QThread] = None
        self._worker: Optional[OverlayWorker] = None

    @property
    def worker(self) -> Optional[OverlayWorker]:
        return self._worker

    @property
    def is_running(self) -> bool:
        return self._thread is not None

    def prepare(self, use_case: OverlayTranslateUseCase) -> Optional[OverlayWorker]:
        """Create thread + worker without starting them.

        Callers connect to the worker's signals, then call ``launch()``.
        Returns ``None`` while a previous run is still going.
        """
        if self.is_running:
            logger.info("Overlay translation already running")
            return None

        self._thread = QThread()
        self._worker = OverlayWorker(use_case)
        self._worker.moveToThread(self._thread)

        # Wire thread start to worker run
        self._thread.started.connect(self._worker.run)

        # Cleanup on finish
        self._worker.finished.connect(self._thread.quit)
        self._worker.finished.connect(self._worker.deleteLater)
        self._thread.finished.connect(self._thread.deleteLater)
        self._thread.finished.connect(self._on_thread_finished)
        return self._worker

    def launch(self) -> None:
        if self._thread is not None and not self._thread.isRunning():
            self._thread.start()

    def cancel(self) -> None:
        """Set the cancellation token on the worker."""
        if self._worker is not None:
            self._worker.cancel()

    def _on_thread_finished(self) -> None:
        """Clean up references after thread ends."""
        self._thread = None
        self._worker = None
