import pytest

from domain.errors import InvalidTransition
from domain.models import Rect
from engine.overlay_element import (
    MAX_SCALE,
    MIN_SCALE,
    ElementState,
    OverlayElement,
)


@pytest.fixture
def element():
    return OverlayElement("Hello", Rect(10, 10, 100, 40), font_size=20, container_size=(400, 300))


def test_initial_state(element):
    assert element.state is ElementState.IDLE
    assert element.position == (10, 10)
    assert element.size == (100, 40)
    assert element.scale_factor == 1.0
    assert not element.highlighted


def test_font_size_is_clamped_on_creation():
    assert OverlayElement("a", Rect(0, 0, 50, 20), 200, (400, 300)).font_size == 72
    assert OverlayElement("a", Rect(0, 0, 50, 20), 1, (400, 300)).font_size == 8


def test_drag_moves_by_pointer_delta(element):
    assert element.press((20, 20))
    assert element.state is ElementState.DRAGGING

    assert element.move((50, 60))
    assert element.position == (40, 50)

    assert element.release()
    assert element.state is ElementState.IDLE
    assert element.position == (40, 50)


def test_drag_is_clamped_to_container(element):
    element.press((20, 20))

    element.move((1000, 1000))
    assert element.position == (300, 260)

    element.move((-1000, -1000))
    assert element.position == (0, 0)


def test_element_larger_than_container_is_pinned_to_origin():
    element = OverlayElement("wide", Rect(30, 30, 100, 40), 20, container_size=(50, 20))

    assert element.position == (0, 0)
    element.press((0, 0))
    element.move((25, 25))
    assert element.position == (0, 0)


def test_move_and_release_outside_drag_are_ignored(element):
    assert not element.move((100, 100))
    assert not element.release()
    assert element.position == (10, 10)


def test_zoom_keeps_centre_anchored(element):
    before = element.bounds.center

    assert element.zoom(120)

    assert element.scale_factor == pytest.approx(1.1)
    assert element.font_size == 22
    width, height = element.size
    assert width == pytest.approx(110)
    assert height == pytest.approx(44)
    after = element.bounds.center
    assert after[0] == pytest.approx(before[0])
    assert after[1] == pytest.approx(before[1])


def test_zoom_out_shrinks_font(element):
    assert element.zoom(-1)

    assert element.scale_factor == pytest.approx(0.9)
    assert element.font_size == 18


def test_zoom_stops_at_max_scale(element):
    for _ in range(40):
        element.zoom(1)

    assert element.scale_factor == pytest.approx(MAX_SCALE)
    assert element.font_size == 60
    assert not element.zoom(1)


def test_zoom_stops_at_min_scale(element):
    for _ in range(10):
        element.zoom(-1)

    assert element.scale_factor == pytest.approx(MIN_SCALE)
    assert not element.zoom(-1)


def test_zoom_without_direction_is_noop(element):
    assert not element.zoom(0)
    assert element.scale_factor == 1.0


def test_size_has_a_floor():
    element = OverlayElement("a", Rect(0, 0, 10, 5), 10, (400, 300))

    assert element.size == (20, 16)


def test_zoom_near_container_edge_is_reclamped():
    element = OverlayElement("edge", Rect(300, 260, 100, 40), 20, container_size=(400, 300))

    element.zoom(1)

    x, y = element.position
    width, height = element.size
    assert x + width <= 400 + 1e-9
    assert y + height <= 300 + 1e-9


def test_double_click_edits_and_commit_replaces_text(element):
    assert element.press((20, 20), click_count=2)
    assert element.state is ElementState.EDITING
    assert element.edited_text == "Hello"
    assert element.edit_size == (100, 40)
    assert element.highlighted

    element.set_edited_text("Bonjour")
    element.commit_edit()

    assert element.state is ElementState.IDLE
    assert element.text == "Bonjour"
    assert element.edit_size is None


def test_cancel_edit_keeps_previous_text(element):
    element.begin_edit()
    element.set_edited_text("discarded")

    element.cancel_edit()

    assert element.state is ElementState.IDLE
    assert element.text == "Hello"
    assert element.edited_text == "Hello"


def test_press_while_editing_is_not_handled(element):
    element.begin_edit()

    assert not element.press((20, 20))
    assert element.state is ElementState.EDITING


def test_zoom_while_editing_updates_locked_size(element):
    element.begin_edit()

    element.zoom(1)

    assert element.state is ElementState.EDITING
    width, height = element.edit_size
    assert width == pytest.approx(110)
    assert height == pytest.approx(44)


def test_editing_while_dragging_is_rejected(element):
    element.press((20, 20))

    with pytest.raises(InvalidTransition):
        element.begin_edit()
    assert element.state is ElementState.DRAGGING


@pytest.mark.parametrize("event", ["commit_edit", "cancel_edit"])
def test_edit_events_outside_editing_are_rejected(element, event):
    with pytest.raises(InvalidTransition):
        getattr(element, event)()


def test_set_edited_text_outside_editing_is_rejected(element):
    with pytest.raises(InvalidTransition):
        element.set_edited_text("x")


def test_hover_highlights(element):
    element.hovered = True

    assert element.highlighted


def test_container_resize_reclamps(element):
    element.press((0, 0))
    element.move((290, 250))
    element.release()

    element.set_container_size((200, 100))

    assert element.position == (100, 60)
    assert element.container_size == (200, 100)


def test_original_bounds_cannot_be_mutated(element):
    bounds = element.original_bounds
    bounds.width = 999

    assert element.original_bounds.width == 100


def test_zoom_during_drag_keeps_centre_on_next_move(element):
    element.press((0, 0))
    element.zoom(1)
    zoomed_centre = element.bounds.center

    element.move((0, 0))
    assert element.bounds.center[0] == pytest.approx(zoomed_centre[0])
    assert element.bounds.center[1] == pytest.approx(zoomed_centre[1])

    element.move((30, 20))
    assert element.bounds.center[0] == pytest.approx(zoomed_centre[0] + 30)
    assert element.bounds.center[1] == pytest.approx(zoomed_centre[1] + 20)
    assert element.state is ElementState.DRAGGING
