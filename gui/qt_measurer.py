from __future__ import annotations

from typing import Tuple

from PySide6.QtGui import QFont, QFontMetricsF

OVERLAY_FONT_FAMILIES = ["Microsoft YaHei", "PingFang SC", "Noto Sans CJK SC", "Arial", "SimSun"]

# Overlay sizes are device-independent pixels (96 per inch); Qt fonts use points.
_POINTS_PER_DIP = 72.0 / 96.0


def overlay_font(font_size: float) -> QFont:
    font = QFont()
    font.setFamilies(OVERLAY_FONT_FAMILIES)
    font.setBold(True)
    font.setPointSizeF(max(1.0, font_size * _POINTS_PER_DIP))
    return font


class QtTextMeasurer:
    """Single-line text extent as the overlay widgets will draw it."""

    def measure(self, text: str, font_size: float) -> Tuple[float, float]:
        metrics = QFontMetricsF(overlay_font(font_size))
        return metrics.horizontalAdvance(text), metrics.height()
