"""Qt presentation tests; run with OVERLAY_QT_TESTS=1 (QT_QPA_PLATFORM=offscreen works)."""
import pytest

from domain.models import OverlayResult, Rect, TextBlockPlacement
from engine.overlay_element import ElementState

pytestmark = pytest.mark.qt_required


@pytest.fixture(scope="module")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    from gui.overlay_window import ScreenOverlayWindow

    win = ScreenOverlayWindow()
    win.resize(400, 300)
    yield win
    win.close()


def _placements():
    return [
        TextBlockPlacement("Hello", Rect(10, 10, 100, 30), 18),
        TextBlockPlacement("World", Rect(10, 60, 100, 30), 18),
    ]


def test_populate_creates_one_widget_per_placement(window):
    window.populate(_placements())

    blocks = window.text_blocks
    assert len(blocks) == 2
    assert blocks[0].geometry().topLeft().x() == 10
    assert blocks[1].geometry().topLeft().y() == 60
    assert len(window.controller.elements) == 2


def test_live_fit_refines_font_sizes(window):
    window.populate([TextBlockPlacement("a rather long translated sentence", Rect(0, 0, 60, 20), 15)])

    element = window.controller.elements[0]
    assert element.font_size < 15


def test_show_result_replaces_blocks(window):
    window.populate(_placements())

    window.show_result(OverlayResult(placements=[TextBlockPlacement("Only", Rect(0, 0, 50, 20), 12)]))

    assert [w.element.text for w in window.text_blocks] == ["Only"]


def test_editing_one_block_commits_the_other(window):
    window.populate(_placements())
    first, second = window.controller.elements

    first.begin_edit()
    first.set_edited_text("Bonjour")
    second.begin_edit()
    for block in window.text_blocks:
        block.sync()

    assert first.state is ElementState.IDLE
    assert first.text == "Bonjour"
    assert second.state is ElementState.EDITING


def test_toggle_hides_blocks(window):
    window.populate(_placements())

    window.toggle_translation()

    assert all(block.isHidden() for block in window.text_blocks)


def test_close_clears_controller(window):
    window.populate(_placements())
    window.show()

    window.close()

    assert window.controller.elements == ()
    assert window.text_blocks == []


def test_qt_measurer_grows_with_font(qapp):
    from gui.qt_measurer import QtTextMeasurer

    measurer = QtTextMeasurer()
    small_w, small_h = measurer.measure("Hello", 10)
    large_w, large_h = measurer.measure("Hello", 30)

    assert large_w > small_w
    assert large_h > small_h


def _wait_until(qapp, condition, timeout=5.0):
    import time

    deadline = time.monotonic() + timeout
    while not condition() and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    return condition()


def _instant_use_case(placements):
    from unittest.mock import AsyncMock, Mock

    use_case = Mock()
    use_case.execute = AsyncMock(return_value=OverlayResult(placements=placements))
    return use_case


def test_prepared_worker_does_not_run_before_launch(qapp):
    from gui.worker import PipelineController

    pipeline = PipelineController()
    use_case = _instant_use_case([])
    results = []

    worker = pipeline.prepare(use_case)
    worker.result_ready.connect(results.append)

    assert pipeline.is_running
    assert pipeline.prepare(use_case) is None
    use_case.execute.assert_not_called()

    pipeline.launch()
    assert _wait_until(qapp, lambda: not pipeline.is_running)
    assert len(results) == 1


def test_instant_result_reaches_the_window(window, qapp):
    window.start(_instant_use_case(_placements()))

    assert _wait_until(qapp, lambda: len(window.text_blocks) == 2)
    assert [b.element.text for b in window.text_blocks] == ["Hello", "World"]
