"""
Data models for the screen overlay translation pipeline.
Decoupled from any OCR / translation engine internals.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, asdict
from typing import List, NamedTuple, Optional, Tuple


class BoxPoint(NamedTuple):
    """Integer point in source-image pixel space."""

    x: int
    y: int


@dataclass
class Rect:
    """Axis-aligned rectangle.

    The coordinate space (pixel, logical or screen) is a property of the
    context the value is used in, never of the value itself.
    """

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.left + self.width / 2, self.top + self.height / 2

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def union(self, other: "Rect") -> "Rect":
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(left, top, right - left, bottom - top)

    def corners(self) -> List[BoxPoint]:
        """Corner points in box order: top-left, top-right, bottom-right, bottom-left."""
        left, top = int(self.left), int(self.top)
        right, bottom = int(self.right), int(self.bottom)
        return [
            BoxPoint(left, top),
            BoxPoint(right, top),
            BoxPoint(right, bottom),
            BoxPoint(left, bottom),
        ]


@dataclass
class RecognizedFragment:
    """A single OCR'd piece of text and its shape."""

    # ── content ──
    text: str
    """Recognized text, replaced in place by its translation."""

    # ── geometry ──
    box_points: List[BoxPoint] = field(default_factory=list)
    """Quadrilateral (usually 4 points) in source-image pixel space."""

    @property
    def has_geometry(self) -> bool:
        return bool(self.box_points)


@dataclass(frozen=True)
class TextBlockPlacement:
    """Hand-off value from the pipeline to the interactive layer."""

    text: str
    bounds: Rect
    """Logical-space rectangle where the source text was."""
    font_size: float


@dataclass
class RecognitionOutcome:
    success: bool
    text: str = ""
    fragments: List[RecognizedFragment] = field(default_factory=list)


@dataclass
class TranslationOutcome:
    success: bool
    text: str = ""


@dataclass
class LanguageDetection:
    success: bool
    source_lang: str = "auto"
    target_lang: str = "en"


@dataclass
class CaptureResult:
    """A captured screen region."""

    image_bytes: bytes
    screen_bounds: Rect
    """Physical-pixel rectangle of the capture on screen."""
    dpi_x: float = 96.0
    dpi_y: float = 96.0

    @property
    def has_screen_bounds(self) -> bool:
        return self.screen_bounds.width > 0 and self.screen_bounds.height > 0


@dataclass
class OverlayResult:
    """Complete outcome of one pipeline run."""

    placements: List[TextBlockPlacement] = field(default_factory=list)
    screen_bounds: Optional[Rect] = None
    image_bytes: bytes = b""
    dpi_x: float = 96.0
    dpi_y: float = 96.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("image_bytes")
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
