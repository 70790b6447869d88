from typing import Sequence

import numpy as np

from domain.models import BoxPoint, Rect

SAME_LINE_OVERLAP_RATIO = 0.5
MAX_GAP_HEIGHT_RATIO = 0.5


def bounding_rect(points: Sequence[BoxPoint]) -> Rect:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    min_coord = pts.min(axis=0)
    max_coord = pts.max(axis=0)
    return Rect(
        float(min_coord[0]), float(min_coord[1]),
        float(max_coord[0] - min_coord[0]), float(max_coord[1] - min_coord[1]),
    )


def vertical_overlap_ratio(a: Rect, b: Rect) -> float:
    overlap = max(0.0, min(a.bottom, b.bottom) - max(a.top, b.top))
    min_height = min(a.height, b.height)
    return overlap / min_height if min_height > 0 else 0.0


def horizontal_gap(a: Rect, b: Rect) -> float:
    return min(abs(a.right - b.left), abs(b.right - a.left))


def are_adjacent(a: Rect, b: Rect) -> bool:
    """Same text line and horizontally touching; lines are never stacked."""
    if vertical_overlap_ratio(a, b) < SAME_LINE_OVERLAP_RATIO:
        return False
    return horizontal_gap(a, b) <= MAX_GAP_HEIGHT_RATIO * max(a.height, b.height)
