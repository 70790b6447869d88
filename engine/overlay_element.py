"""Interactive translated text block: drag, anchored zoom, in-place editing.

The element is a state machine over ``idle``, ``dragging`` and ``editing``.
Each state is a distinct mode object, so a block can never be dragging and
editing at the same time. Editing exclusivity across blocks belongs to the
owning ``OverlayController``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from domain.errors import InvalidTransition
from domain.models import Rect

from .log import get_logger
from .text_fit import clamp

if TYPE_CHECKING:
    from .overlay_controller import OverlayController

logger = get_logger("overlay_element")

Point = Tuple[float, float]
Size = Tuple[float, float]

MIN_FONT_SIZE = 8.0
MAX_FONT_SIZE = 72.0
FONT_STEP = 2.0
MIN_SCALE = 0.5
MAX_SCALE = 3.0
SCALE_STEP = 0.1
SCALE_EPSILON = 0.01
MIN_WIDTH = 20.0
MIN_HEIGHT = 16.0


class ElementState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    EDITING = "editing"


@dataclass(frozen=True)
class _Idle:
    state = ElementState.IDLE


@dataclass(frozen=True)
class _Dragging:
    pointer_start: Point
    position_start: Point
    state = ElementState.DRAGGING


@dataclass
class _Editing:
    edited_text: str
    locked_size: Size
    state = ElementState.EDITING


_Mode = Union[_Idle, _Dragging, _Editing]


class OverlayElement:

    def __init__(
        self,
        text: str,
        bounds: Rect,
        font_size: float,
        container_size: Size,
        owner: Optional["OverlayController"] = None,
    ) -> None:
        self._text = text
        self._original_bounds = Rect(bounds.left, bounds.top, bounds.width, bounds.height)
        self._font_size = clamp(font_size, MIN_FONT_SIZE, MAX_FONT_SIZE)
        self._scale_factor = 1.0
        self._container_size = container_size
        self._owner = owner
        self._mode: _Mode = _Idle()
        self.hovered = False
        self._position = self._clamp_position(bounds.left, bounds.top)

    # ── read-only state ──

    @property
    def state(self) -> ElementState:
        return self._mode.state

    @property
    def text(self) -> str:
        return self._text

    @property
    def edited_text(self) -> str:
        if isinstance(self._mode, _Editing):
            return self._mode.edited_text
        return self._text

    @property
    def font_size(self) -> float:
        return self._font_size

    @property
    def scale_factor(self) -> float:
        return self._scale_factor

    @property
    def original_bounds(self) -> Rect:
        return Rect(
            self._original_bounds.left, self._original_bounds.top,
            self._original_bounds.width, self._original_bounds.height,
        )

    @property
    def position(self) -> Point:
        return self._position

    @property
    def container_size(self) -> Size:
        return self._container_size

    @property
    def size(self) -> Size:
        return (
            max(self._original_bounds.width * self._scale_factor, MIN_WIDTH),
            max(self._original_bounds.height * self._scale_factor, MIN_HEIGHT),
        )

    @property
    def bounds(self) -> Rect:
        width, height = self.size
        return Rect(self._position[0], self._position[1], width, height)

    @property
    def edit_size(self) -> Optional[Size]:
        """Size the edit surface is locked to while editing."""
        if isinstance(self._mode, _Editing):
            return self._mode.locked_size
        return None

    @property
    def highlighted(self) -> bool:
        return self.hovered or self.state is ElementState.EDITING

    # ── pointer events ──

    def press(self, pointer: Point, click_count: int = 1) -> bool:
        """Primary button press. Returns whether the event was handled."""
        if self.state is not ElementState.IDLE:
            return False
        if click_count >= 2:
            self.begin_edit()
        else:
            self._mode = _Dragging(pointer_start=pointer, position_start=self._position)
        return True

    def move(self, pointer: Point) -> bool:
        if not isinstance(self._mode, _Dragging):
            return False
        dx = pointer[0] - self._mode.pointer_start[0]
        dy = pointer[1] - self._mode.pointer_start[1]
        start_x, start_y = self._mode.position_start
        self._position = self._clamp_position(start_x + dx, start_y + dy)
        return True

    def release(self) -> bool:
        if not isinstance(self._mode, _Dragging):
            return False
        self._mode = _Idle()
        return True

    def zoom(self, steps: int) -> bool:
        """Modifier-wheel zoom around the element centre, allowed in any state.

        *steps* only contributes its sign. Returns whether anything changed.
        """
        if steps == 0:
            return False
        direction = 1 if steps > 0 else -1
        new_scale = clamp(self._scale_factor + direction * SCALE_STEP, MIN_SCALE, MAX_SCALE)
        if abs(new_scale - self._scale_factor) < SCALE_EPSILON:
            return False

        old_width, old_height = self.size
        center_x = self._position[0] + old_width / 2
        center_y = self._position[1] + old_height / 2

        self._scale_factor = new_scale
        self._font_size = clamp(self._font_size + direction * FONT_STEP, MIN_FONT_SIZE, MAX_FONT_SIZE)

        width, height = self.size
        if isinstance(self._mode, _Editing):
            self._mode.locked_size = (width, height)
        old_x, old_y = self._position
        self._position = self._clamp_position(center_x - width / 2, center_y - height / 2)
        if isinstance(self._mode, _Dragging):
            # Later moves are relative to the zoomed position.
            start_x, start_y = self._mode.position_start
            self._mode = _Dragging(
                pointer_start=self._mode.pointer_start,
                position_start=(start_x + self._position[0] - old_x, start_y + self._position[1] - old_y),
            )
        return True

    # ── editing ──

    def begin_edit(self) -> None:
        """Enter editing, through the owning controller when there is one."""
        if self._owner is not None:
            self._owner.begin_edit(self)
        else:
            self._enter_edit()

    def _enter_edit(self) -> None:
        if self.state is ElementState.EDITING:
            return
        if self.state is not ElementState.IDLE:
            raise InvalidTransition(self.state, "begin_edit")
        self._mode = _Editing(edited_text=self._text, locked_size=self.size)

    def set_edited_text(self, text: str) -> None:
        if not isinstance(self._mode, _Editing):
            raise InvalidTransition(self.state, "set_edited_text")
        self._mode.edited_text = text

    def commit_edit(self) -> None:
        """Focus lost: the edited text becomes the display text."""
        if not isinstance(self._mode, _Editing):
            raise InvalidTransition(self.state, "commit_edit")
        if self._mode.edited_text != self._text:
            logger.debug(f"Block edited: {self._text!r} -> {self._mode.edited_text!r}")
        self._text = self._mode.edited_text
        self._mode = _Idle()

    def cancel_edit(self) -> None:
        """Cancel key: drop the edits and keep the previous text."""
        if not isinstance(self._mode, _Editing):
            raise InvalidTransition(self.state, "cancel_edit")
        self._mode = _Idle()

    # ── container ──

    def set_container_size(self, container_size: Size) -> None:
        self._container_size = container_size
        self._position = self._clamp_position(*self._position)

    def _clamp_position(self, x: float, y: float) -> Point:
        width, height = self.size
        container_w, container_h = self._container_size
        return (
            clamp(x, 0.0, max(0.0, container_w - width)),
            clamp(y, 0.0, max(0.0, container_h - height)),
        )

    def __repr__(self) -> str:
        preview = self._text[:20].replace("\n", " ")
        return f"OverlayElement({preview!r}, state={self.state.value}, pos={self._position})"
