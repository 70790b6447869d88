"""Burn translated text blocks into the captured image."""

from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

from PIL import Image, ImageDraw

from domain.models import OverlayResult, Rect, TextBlockPlacement
from domain.ports import TextMeasurer
from engine.coordinates import logical_to_pixel
from engine.text_fit import PreciseFitStrategy

from .fonts import PillowTextMeasurer, get_font

logger = logging.getLogger(__name__)

_PADDING = 6
_MIN_AVAILABLE_W = 20
_MIN_AVAILABLE_H = 15
_BACKGROUND = (255, 255, 255)
_FOREGROUND = (0, 0, 0)


def _available_box(bounds: Rect) -> Rect:
    width = max(_MIN_AVAILABLE_W, bounds.width - _PADDING)
    height = max(_MIN_AVAILABLE_H, bounds.height - _PADDING)
    return Rect(bounds.left + (bounds.width - width) / 2, bounds.top + (bounds.height - height) / 2, width, height)


def render_translated_image(
    image: Image.Image,
    placements: Sequence[TextBlockPlacement],
    dpi_x: float,
    dpi_y: float,
    measurer: Optional[TextMeasurer] = None,
    min_size: float = 6.0,
    max_size: float = 48.0,
) -> Image.Image:
    """Return a copy of *image* with every placement drawn over its source box.

    Placements are in logical space and are mapped back to image pixels.
    """
    strategy = PreciseFitStrategy(measurer or PillowTextMeasurer())

    canvas = image.convert("RGB")
    draw = ImageDraw.Draw(canvas)

    for placement in placements:
        bounds = logical_to_pixel(placement.bounds, dpi_x, dpi_y)
        if bounds.is_empty or not placement.text:
            continue
        draw.rectangle(
            [bounds.left, bounds.top, bounds.right, bounds.bottom],
            fill=_BACKGROUND,
        )
        fitted = strategy.fit(placement.text, _available_box(bounds), min_size, max_size)
        cx, cy = bounds.center
        draw.text((cx, cy), fitted.text, font=get_font(fitted.font_size), fill=_FOREGROUND, anchor="mm")

    logger.info(f"  Rendered {len(placements)} text block(s) onto {canvas.width}x{canvas.height} image")
    return canvas


def render_result(
    result: OverlayResult,
    measurer: Optional[TextMeasurer] = None,
    min_size: float = 6.0,
    max_size: float = 48.0,
) -> Optional[Image.Image]:
    if not result.image_bytes:
        return None
    with Image.open(io.BytesIO(result.image_bytes)) as img:
        return render_translated_image(
            img, result.placements, result.dpi_x, result.dpi_y, measurer, min_size, max_size,
        )
