import pytest

from domain.models import Rect
from engine.text_fit import (
    ELLIPSIS,
    LiveFitStrategy,
    PreciseFitStrategy,
    live_font_size,
    select_strategy,
)


def test_precise_fit_finds_largest_size_within_tolerance(measurer):
    result = PreciseFitStrategy(measurer).fit("Hello", Rect(0, 0, 200, 40), 6, 48)

    assert result.text == "Hello"
    # Candidate is min(40 * 0.7, 200 * 0.12) = 24.
    assert 23.5 <= result.font_size <= 24


def test_precise_fit_result_fits_the_box(measurer):
    box = Rect(0, 0, 120, 30)

    result = PreciseFitStrategy(measurer).fit("a somewhat longer line", box, 6, 48)

    width, height = measurer.measure(result.text, result.font_size)
    assert width <= box.width
    assert height <= box.height
    assert 6 <= result.font_size <= 48


def test_precise_fit_truncates_with_ellipsis(measurer):
    box = Rect(0, 0, 30, 20)

    result = PreciseFitStrategy(measurer).fit("x" * 50, box, 6, 48)

    assert result.font_size == 6
    assert result.text.endswith(ELLIPSIS)
    assert result.text == "xxxxx" + ELLIPSIS
    width, _ = measurer.measure(result.text, result.font_size)
    assert width <= box.width


def test_precise_fit_terminates_on_tiny_box(measurer):
    result = PreciseFitStrategy(measurer).fit("translated sentence " * 20, Rect(0, 0, 1, 1), 6, 48)

    assert 0 < len(result.text) <= 4
    assert result.font_size == 6


def test_precise_fit_accepts_empty_text(measurer):
    result = PreciseFitStrategy(measurer).fit("", Rect(0, 0, 100, 40), 6, 48)

    assert result.text == ""
    assert 6 <= result.font_size <= 48


def test_precise_fit_swaps_inverted_bounds(measurer):
    result = PreciseFitStrategy(measurer).fit("Hi", Rect(0, 0, 200, 40), 48, 6)

    assert 6 <= result.font_size <= 48


@pytest.mark.parametrize("height, expected", [(4, 10), (20, 15), (100, 48)])
def test_live_font_size_is_clamped(height, expected):
    assert live_font_size(Rect(0, 0, 100, height)) == expected


def test_live_fit_keeps_heuristic_when_text_fits(measurer):
    result = LiveFitStrategy(measurer).fit("Hi", Rect(0, 0, 100, 20), 1, 72)

    assert result.font_size == 15
    assert result.text == "Hi"


def test_live_fit_shrinks_once_on_overflow(measurer):
    # 10 chars at 15 px measure 90 wide, box is 40 wide.
    result = LiveFitStrategy(measurer).fit("abcdefghij", Rect(0, 0, 40, 20), 1, 72)

    assert result.font_size == pytest.approx(15 * 40 / 90)


def test_live_fit_never_truncates(measurer):
    text = "a very long translation " * 10

    result = LiveFitStrategy(measurer).fit(text, Rect(0, 0, 40, 20), 8, 72)

    assert result.text == text
    assert result.font_size == 8


def test_select_strategy(measurer):
    assert isinstance(select_strategy("offline", measurer), PreciseFitStrategy)
    assert isinstance(select_strategy("live", measurer), LiveFitStrategy)
    with pytest.raises(ValueError):
        select_strategy("print", measurer)
