from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional

import mss
from PIL import Image

from domain.models import CaptureResult, Rect
from engine.coordinates import LOGICAL_DPI, normalize_scale

logger = logging.getLogger(__name__)

MIN_SELECTION = 5


class MssScreenCapture:
    """Grab a fixed physical-pixel region of the desktop.

    The region comes from the (external) selection UI; a region smaller
    than 5×5 pixels is treated as an aborted selection.
    """

    def __init__(self, region: Optional[Rect], dpi_scale: float = 1.0):
        self._region = region
        self._dpi_scale = normalize_scale(dpi_scale)

    async def capture(self) -> Optional[CaptureResult]:
        region = self._region
        if region is None or region.width < MIN_SELECTION or region.height < MIN_SELECTION:
            return None
        return await asyncio.to_thread(self._grab, region)

    def _grab(self, region: Rect) -> CaptureResult:
        monitor = {
            "left": int(region.left),
            "top": int(region.top),
            "width": max(1, int(region.width)),
            "height": max(1, int(region.height)),
        }
        with mss.mss() as sct:
            shot = sct.grab(monitor)
            img = Image.frombytes("RGB", shot.size, shot.bgra, "raw", "BGRX")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        logger.info(f"  Captured {img.width}x{img.height} at ({monitor['left']}, {monitor['top']})")
        dpi = LOGICAL_DPI * self._dpi_scale
        return CaptureResult(
            image_bytes=buf.getvalue(),
            screen_bounds=Rect(monitor["left"], monitor["top"], monitor["width"], monitor["height"]),
            dpi_x=dpi,
            dpi_y=dpi,
        )
