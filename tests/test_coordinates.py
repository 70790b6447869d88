import pytest

from domain.models import BoxPoint, Rect
from engine.coordinates import (
    logical_to_pixel,
    logical_to_screen,
    normalize_dpi,
    pixel_to_logical,
    screen_to_logical,
)
from engine.geometry import bounding_rect, horizontal_gap, vertical_overlap_ratio


@pytest.mark.parametrize("dpi", [0, -1, None])
def test_non_positive_dpi_falls_back_to_96(dpi):
    assert normalize_dpi(dpi) == 96.0


def test_pixel_to_logical_scales_by_dpi():
    rect = pixel_to_logical(Rect(192, 96, 96, 48), 192, 96)

    assert rect == Rect(96, 96, 48, 48)


def test_pixel_to_logical_with_invalid_dpi_is_identity():
    assert pixel_to_logical(Rect(10, 20, 30, 40), 0, -5) == Rect(10, 20, 30, 40)


def test_logical_to_pixel_inverts_pixel_to_logical():
    source = Rect(15, 30, 60, 24)

    back = logical_to_pixel(pixel_to_logical(source, 144, 120), 144, 120)

    assert back.left == pytest.approx(source.left)
    assert back.top == pytest.approx(source.top)
    assert back.width == pytest.approx(source.width)
    assert back.height == pytest.approx(source.height)


def test_logical_to_screen_rounds_and_offsets():
    rect = logical_to_screen(Rect(10.2, 20.6, 30.4, 40.5), (100, 200), 1.5, 1.5)

    assert rect == Rect(115, 231, 46, 61)


def test_logical_to_screen_keeps_at_least_one_pixel():
    rect = logical_to_screen(Rect(0, 0, 0.1, 0), (0, 0), 1.0, 1.0)

    assert rect.width == 1
    assert rect.height == 1


def test_screen_to_logical_removes_origin_and_scale():
    rect = screen_to_logical(Rect(300, 400, 200, 100), (100, 200), 2.0, 2.0)

    assert rect == Rect(100, 100, 100, 50)


def test_bounding_rect_of_rotated_quad():
    points = [BoxPoint(10, 5), BoxPoint(40, 10), BoxPoint(35, 30), BoxPoint(5, 25)]

    assert bounding_rect(points) == Rect(5, 5, 35, 25)


def test_overlap_ratio_with_zero_height_is_zero():
    assert vertical_overlap_ratio(Rect(0, 0, 10, 0), Rect(0, 0, 10, 10)) == 0.0


def test_horizontal_gap_is_distance_between_facing_edges():
    assert horizontal_gap(Rect(0, 0, 10, 10), Rect(15, 0, 10, 10)) == 5
    assert horizontal_gap(Rect(15, 0, 10, 10), Rect(0, 0, 10, 10)) == 5
