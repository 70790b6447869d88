"""Rectangle conversions between pixel, logical and screen space.

* pixel   – source image pixels, as reported by OCR
* logical – device-independent units (96 per inch)
* screen  – physical monitor pixels

Every function is pure; the space of a ``Rect`` is implied by which function
produced it.
"""
from __future__ import annotations

from typing import Tuple

from domain.models import Rect

LOGICAL_DPI = 96.0


def normalize_dpi(dpi: float) -> float:
    return float(dpi) if dpi and dpi > 0 else LOGICAL_DPI


def normalize_scale(scale: float) -> float:
    return float(scale) if scale and scale > 0 else 1.0


def pixel_to_logical(rect: Rect, dpi_x: float, dpi_y: float) -> Rect:
    sx = LOGICAL_DPI / normalize_dpi(dpi_x)
    sy = LOGICAL_DPI / normalize_dpi(dpi_y)
    return Rect(rect.left * sx, rect.top * sy, rect.width * sx, rect.height * sy)


def logical_to_pixel(rect: Rect, dpi_x: float, dpi_y: float) -> Rect:
    sx = normalize_dpi(dpi_x) / LOGICAL_DPI
    sy = normalize_dpi(dpi_y) / LOGICAL_DPI
    return Rect(rect.left * sx, rect.top * sy, rect.width * sx, rect.height * sy)


def logical_to_screen(
    rect: Rect,
    window_origin: Tuple[float, float],
    dpi_scale_x: float,
    dpi_scale_y: float,
) -> Rect:
    """Whole-pixel screen rectangle; width and height are at least 1."""
    sx = normalize_scale(dpi_scale_x)
    sy = normalize_scale(dpi_scale_y)
    ox, oy = window_origin
    return Rect(
        ox + round(rect.left * sx),
        oy + round(rect.top * sy),
        max(1, round(rect.width * sx)),
        max(1, round(rect.height * sy)),
    )


def screen_to_logical(
    rect: Rect,
    window_origin: Tuple[float, float],
    dpi_scale_x: float,
    dpi_scale_y: float,
) -> Rect:
    sx = normalize_scale(dpi_scale_x)
    sy = normalize_scale(dpi_scale_y)
    ox, oy = window_origin
    return Rect(
        (rect.left - ox) / sx,
        (rect.top - oy) / sy,
        rect.width / sx,
        rect.height / sy,
    )
