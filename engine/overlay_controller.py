from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from domain.errors import InvalidTransition
from domain.models import TextBlockPlacement

from .log import get_logger
from .overlay_element import ElementState, OverlayElement, Size

logger = get_logger("overlay_controller")


class OverlayController:
    """Owns the text blocks of one overlay surface.

    At most one of its elements is editing at any time. The editor slot
    lives and dies with the controller, so separate surfaces never affect
    each other.
    """

    def __init__(self, container_size: Size = (0.0, 0.0)) -> None:
        self._container_size = container_size
        self._elements: List[OverlayElement] = []
        self._editor: Optional[OverlayElement] = None

    @property
    def elements(self) -> Tuple[OverlayElement, ...]:
        return tuple(self._elements)

    @property
    def container_size(self) -> Size:
        return self._container_size

    @property
    def active_editor(self) -> Optional[OverlayElement]:
        if self._editor is not None and self._editor.state is ElementState.EDITING:
            return self._editor
        return None

    def populate(
        self,
        placements: Sequence[TextBlockPlacement],
        container_size: Optional[Size] = None,
    ) -> List[OverlayElement]:
        """Replace every element with one per placement, in placement order."""
        self.close()
        if container_size is not None:
            self._container_size = container_size
        for placement in placements:
            self._elements.append(OverlayElement(
                text=placement.text,
                bounds=placement.bounds,
                font_size=placement.font_size,
                container_size=self._container_size,
                owner=self,
            ))
        logger.debug(f"Populated {len(self._elements)} element(s)")
        return list(self._elements)

    def begin_edit(self, element: OverlayElement) -> None:
        if element not in self._elements:
            raise ValueError("Element does not belong to this overlay")
        current = self.active_editor
        if current is element:
            return
        if element.state is not ElementState.IDLE:
            raise InvalidTransition(element.state, "begin_edit")
        if current is not None:
            current.commit_edit()
        element._enter_edit()
        self._editor = element

    def end_all_edits(self) -> None:
        """Click on empty canvas: commit whichever element is editing."""
        current = self.active_editor
        if current is not None:
            current.commit_edit()
        self._editor = None

    def set_container_size(self, container_size: Size) -> None:
        self._container_size = container_size
        for element in self._elements:
            element.set_container_size(container_size)

    def close(self) -> None:
        self._elements.clear()
        self._editor = None
