"""Fit translated text into the box the source text occupied.

Two strategies share one interface:

* ``PreciseFitStrategy`` – binary search on measured text, with ellipsis
  truncation as a last resort. Used for offline image rendering.
* ``LiveFitStrategy`` – one heuristic guess plus at most one proportional
  correction. Used while the overlay is interactive.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from domain.models import Rect
from domain.ports import TextMeasurer

from .log import get_logger

logger = get_logger("text_fit")

ELLIPSIS = "..."
SIZE_TOLERANCE = 0.5
MIN_TRUNCATED_LENGTH = 4

LIVE_MIN_SIZE = 10.0
LIVE_MAX_SIZE = 48.0
LIVE_HEIGHT_RATIO = 0.75


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def live_font_size(box: Rect) -> float:
    return clamp(box.height * LIVE_HEIGHT_RATIO, LIVE_MIN_SIZE, LIVE_MAX_SIZE)


@dataclass(frozen=True)
class FitResult:
    text: str
    font_size: float


class TextFitStrategy(Protocol):
    def fit(self, text: str, box: Rect, min_size: float, max_size: float) -> FitResult: ...


class PreciseFitStrategy:

    def __init__(self, measurer: TextMeasurer):
        self._measurer = measurer

    def fit(self, text: str, box: Rect, min_size: float, max_size: float) -> FitResult:
        if min_size > max_size:
            min_size, max_size = max_size, min_size
        initial = clamp(min(box.height * 0.7, box.width * 0.12), min_size, max_size)
        size = self._largest_fitting_size(text, box, min_size, initial)
        if self._fits(text, size, box):
            return FitResult(text, size)

        truncated = self._truncate(text, size, box)
        logger.debug(f"Truncated {len(text)} chars to {len(truncated)} at size {size:.1f}")
        return FitResult(truncated, size)

    def _fits(self, text: str, size: float, box: Rect) -> bool:
        width, height = self._measurer.measure(text, size)
        return width <= box.width and height <= box.height

    def _largest_fitting_size(self, text: str, box: Rect, low: float, high: float) -> float:
        best = low
        while high - low > SIZE_TOLERANCE:
            mid = (low + high) / 2
            if self._fits(text, mid, box):
                best = mid
                low = mid
            else:
                high = mid
        return best

    def _truncate(self, text: str, size: float, box: Rect) -> str:
        per_line = max(1, math.floor(box.width / (size * 0.6)))
        lines = max(1, math.floor(box.height / (size * 1.2)))
        capacity = per_line * lines

        if len(text) <= capacity:
            truncated = text
        elif capacity > len(ELLIPSIS):
            truncated = text[:capacity - len(ELLIPSIS)] + ELLIPSIS
        else:
            truncated = text[:capacity]

        while len(truncated) > MIN_TRUNCATED_LENGTH and not self._fits(truncated, size, box):
            if len(truncated) > MIN_TRUNCATED_LENGTH + 2:
                body = truncated[:-len(ELLIPSIS)] if truncated.endswith(ELLIPSIS) else truncated
                truncated = body[:-MIN_TRUNCATED_LENGTH] + ELLIPSIS
            else:
                truncated = truncated[:-1]
        return truncated


class LiveFitStrategy:

    def __init__(self, measurer: TextMeasurer):
        self._measurer = measurer

    def fit(self, text: str, box: Rect, min_size: float, max_size: float) -> FitResult:
        size = live_font_size(box)
        width, _ = self._measurer.measure(text, size)
        if width > box.width and box.width > 0 and width > 0:
            size *= box.width / width
        return FitResult(text, clamp(size, min(min_size, max_size), max(min_size, max_size)))


def select_strategy(context: str, measurer: TextMeasurer) -> TextFitStrategy:
    """``"offline"`` for image rendering, ``"live"`` for the interactive overlay."""
    if context == "offline":
        return PreciseFitStrategy(measurer)
    if context == "live":
        return LiveFitStrategy(measurer)
    raise ValueError(f"Unknown text fit context: {context!r}")
