from __future__ import annotations

import logging
from typing import List, Optional

from domain.cancellation import CancellationToken
from domain.errors import (
    AcquisitionCancelled,
    NoGeometry,
    OverlayError,
    RecognitionFailed,
    RecognitionUnavailable,
    TranslationUnavailable,
)
from domain.models import (
    CaptureResult,
    OverlayResult,
    RecognizedFragment,
    TextBlockPlacement,
)
from domain.ports import (
    CapturePort,
    LanguageDetectorPort,
    NotifierPort,
    OcrPort,
    TranslatorPort,
)
from engine import layout
from engine.config import OverlayConfig
from engine.coordinates import normalize_dpi, pixel_to_logical
from engine.geometry import bounding_rect
from engine.text_fit import live_font_size

from .translate_fragments import TranslationOrchestrator

logger = logging.getLogger(__name__)

NOTICE_TITLE = "Screen overlay"


class OverlayTranslateUseCase:
    """One capture → OCR → merge → translate → place run.

    Either a full placement set is produced or none: fatal conditions are
    reported once through the notifier and yield an empty result.
    """

    def __init__(
        self,
        capture: CapturePort,
        ocr: Optional[OcrPort],
        translator: Optional[TranslatorPort],
        detector: LanguageDetectorPort,
        notifier: NotifierPort,
        config: Optional[OverlayConfig] = None,
    ):
        self._capture = capture
        self._ocr = ocr
        self._translator = translator
        self._detector = detector
        self._notifier = notifier
        self._config = config or OverlayConfig()

    async def execute(self, token: Optional[CancellationToken] = None) -> OverlayResult:
        token = token or CancellationToken()
        try:
            return await self._run(token)
        except OverlayError as exc:
            if not exc.user_visible:
                logger.info(f"  {exc}")
            else:
                logger.warning(f"  {exc}")
                self._notifier.notify(NOTICE_TITLE, exc.message)
        except Exception as exc:
            logger.exception("Screen overlay translation failed")
            self._notifier.notify(NOTICE_TITLE, f"Screen overlay translation failed\n{exc}")
        return OverlayResult()

    async def _run(self, token: CancellationToken) -> OverlayResult:
        logger.info("Capturing screen region...")
        captured = await self._capture.capture()
        if captured is None:
            raise AcquisitionCancelled()
        token.raise_if_cancelled()

        if self._ocr is None:
            raise RecognitionUnavailable()
        logger.info("  Running OCR...")
        outcome = await self._ocr.recognize(captured.image_bytes, self._config.ocr_language)
        if not outcome.success or not outcome.text:
            raise RecognitionFailed()
        if not any(f.has_geometry for f in outcome.fragments):
            raise NoGeometry()
        logger.info(f"  OCR recognized {len(outcome.fragments)} fragment(s)")
        token.raise_if_cancelled()

        fragments = [f for f in layout.merge(outcome.fragments) if f.text.strip()]
        logger.info(f"  Merged into {len(fragments)} line(s)")

        if self._translator is None:
            raise TranslationUnavailable()
        orchestrator = TranslationOrchestrator(
            detector=self._detector,
            translator=self._translator,
            max_concurrency=self._config.concurrency,
            default_target_lang=self._config.target_lang,
        )
        await orchestrator.translate_all(fragments, token)

        placements = self.build_placements(fragments, captured)
        logger.info(f"  Placed {len(placements)} text block(s)")
        return OverlayResult(
            placements=placements,
            screen_bounds=captured.screen_bounds if captured.has_screen_bounds else None,
            image_bytes=captured.image_bytes,
            dpi_x=normalize_dpi(captured.dpi_x),
            dpi_y=normalize_dpi(captured.dpi_y),
        )

    @staticmethod
    def build_placements(
        fragments: List[RecognizedFragment], captured: CaptureResult
    ) -> List[TextBlockPlacement]:
        """Logical-space placements in top-then-left order of the source text."""
        located = [
            (bounding_rect(f.box_points), f)
            for f in fragments
            if f.has_geometry and f.text.strip()
        ]
        located.sort(key=lambda item: (item[0].top, item[0].left))

        placements: List[TextBlockPlacement] = []
        for pixel_bounds, fragment in located:
            bounds = pixel_to_logical(pixel_bounds, captured.dpi_x, captured.dpi_y)
            placements.append(TextBlockPlacement(
                text=fragment.text,
                bounds=bounds,
                font_size=live_font_size(bounds),
            ))
        return placements
