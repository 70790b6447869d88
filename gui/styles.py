"""Overlay design tokens.

Colour palette and QSS for the translated text blocks and the overlay surface.
"""
from __future__ import annotations

from PySide6.QtGui import QColor
from PySide6.QtWidgets import QGraphicsDropShadowEffect, QWidget

# ---------------------------------------------------------------------------
# Color palette
# ---------------------------------------------------------------------------

BLOCK_BACKGROUND = "#ffffff"
BLOCK_TEXT = "#000000"
HIGHLIGHT_BORDER = "#0078d7"
TRANSPARENT = "transparent"

# Nearly transparent, so clicks on empty canvas still reach the window.
SURFACE_BACKGROUND = QColor(0, 0, 0, 1)

# ---------------------------------------------------------------------------
# Shadow helper
# ---------------------------------------------------------------------------


def apply_shadow(
    widget: QWidget,
    offset_x: float = 1,
    offset_y: float = 1,
    blur: float = 4,
    color: str = "#40000000",
) -> QGraphicsDropShadowEffect:
    """Give a text block a faint lift off the screenshot.

    Each widget can only hold one QGraphicsEffect, so calling this
    replaces any previous effect on the widget.
    """
    effect = QGraphicsDropShadowEffect(widget)
    effect.setOffset(offset_x, offset_y)
    effect.setBlurRadius(blur)
    effect.setColor(QColor(color))
    widget.setGraphicsEffect(effect)
    return effect


# ---------------------------------------------------------------------------
# Text block QSS
# ---------------------------------------------------------------------------


def block_stylesheet(highlighted: bool) -> str:
    border = HIGHLIGHT_BORDER if highlighted else TRANSPARENT
    return f"""
QFrame#text_block {{
    background-color: {BLOCK_BACKGROUND};
    border: 1px solid {border};
    border-radius: 2px;
}}

QLabel#text_block_label {{
    color: {BLOCK_TEXT};
    background: {TRANSPARENT};
}}

QLineEdit#text_block_editor {{
    color: {BLOCK_TEXT};
    background-color: {BLOCK_BACKGROUND};
    border: none;
    padding: 0px;
}}
"""
