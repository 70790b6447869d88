from __future__ import annotations

import io
import os
from typing import Optional

from PIL import Image

from domain.errors import CaptureFailed
from domain.models import CaptureResult, Rect
from engine.coordinates import normalize_dpi


class ImageFileCapture:
    """Use an image already on disk as the captured region.

    The image DPI is read from its metadata and defaults to 96. A missing or
    unreadable file is a failed capture, not an aborted one.
    """

    def __init__(self, image_path: str, screen_bounds: Optional[Rect] = None):
        self._image_path = image_path
        self._screen_bounds = screen_bounds

    async def capture(self) -> Optional[CaptureResult]:
        if not os.path.isfile(self._image_path):
            raise CaptureFailed(f"Image not found: {self._image_path}")
        try:
            with open(self._image_path, "rb") as f:
                data = f.read()
            with Image.open(io.BytesIO(data)) as img:
                dpi = img.info.get("dpi") or (0, 0)
                width, height = img.size
        except OSError as exc:
            raise CaptureFailed(f"Unreadable image {self._image_path}: {exc}") from exc

        return CaptureResult(
            image_bytes=data,
            screen_bounds=self._screen_bounds or Rect(0, 0, width, height),
            dpi_x=normalize_dpi(float(dpi[0])),
            dpi_y=normalize_dpi(float(dpi[1])),
        )
