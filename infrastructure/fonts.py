from __future__ import annotations

import glob
import logging
import os
import platform
from typing import Optional, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

_FONT_CACHE: dict[int, ImageFont.FreeTypeFont] = {}

_DARWIN_FONTS = [
    "/System/Library/Fonts/PingFang.ttc",
    "/System/Library/Fonts/Hiragino Sans GB.ttc",
    "/System/Library/Fonts/STHeiti Light.ttc",
    "/Library/Fonts/Arial Unicode.ttf",
]

_LINUX_FONT_GLOBS = [
    "/usr/share/fonts/**/NotoSansCJK*-Bold.ttc",
    "/usr/share/fonts/**/NotoSansCJK*.ttc",
    "/usr/share/fonts/**/DejaVuSans-Bold.ttf",
]

_LINUX_FONT_FALLBACK = "/usr/share/fonts/truetype/noto/NotoSansCJK-Bold.ttc"


def find_font_path() -> Optional[str]:
    """Bold CJK-capable system font, matching the overlay's typeface."""
    system = platform.system()

    if system == "Darwin":
        candidates = _DARWIN_FONTS
    elif system == "Linux":
        candidates = []
        for pattern in _LINUX_FONT_GLOBS:
            candidates.extend(sorted(glob.glob(pattern, recursive=True)))
        candidates.append(_LINUX_FONT_FALLBACK)
    elif system == "Windows":
        fonts_dir = os.path.join(os.environ.get("WINDIR", r"C:\Windows"), "Fonts")
        candidates = [
            os.path.join(fonts_dir, "msyhbd.ttc"),
            os.path.join(fonts_dir, "msyh.ttc"),
            os.path.join(fonts_dir, "arialbd.ttf"),
            os.path.join(fonts_dir, "simsun.ttc"),
        ]
    else:
        candidates = []

    for path in candidates:
        if os.path.isfile(path):
            return path

    return None


def get_font(size: float) -> ImageFont.FreeTypeFont:
    px = max(1, int(round(size)))
    if px in _FONT_CACHE:
        return _FONT_CACHE[px]

    path = find_font_path()
    if path:
        font = ImageFont.truetype(path, px)
        logger.debug(f"Using font: {path} @ {px}px")
    else:
        logger.warning(
            "No CJK font found. Text will render with default font. "
            "Install Noto Sans CJK for best results."
        )
        font = ImageFont.load_default(px)

    _FONT_CACHE[px] = font
    return font


class PillowTextMeasurer:
    """Single-line text extent with the system overlay font."""

    def measure(self, text: str, font_size: float) -> Tuple[float, float]:
        font = get_font(font_size)
        ascent, descent = font.getmetrics()
        return float(font.getlength(text)), float(ascent + descent)
