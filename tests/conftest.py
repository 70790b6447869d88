from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from domain.models import Rect, RecognizedFragment  # noqa: E402


def pytest_runtest_setup(item):
    if item.get_closest_marker("qt_required"):
        if not os.getenv("OVERLAY_QT_TESTS"):
            pytest.skip("OVERLAY_QT_TESTS not set; skipping Qt-dependent test")


def fragment(text: str, left: float, top: float, right: float, bottom: float) -> RecognizedFragment:
    """Fragment whose box is the axis-aligned rectangle (left, top)-(right, bottom)."""
    return RecognizedFragment(
        text=text,
        box_points=Rect(left, top, right - left, bottom - top).corners(),
    )


class FakeMeasurer:
    """Monospace-ish measurer: each character is 0.6 em wide, lines are 1.2 em tall."""

    def measure(self, text: str, font_size: float):
        return len(text) * font_size * 0.6, font_size * 1.2


@pytest.fixture
def measurer():
    return FakeMeasurer()
