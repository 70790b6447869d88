"""GUI entry point for screen-overlay-translator."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from engine.log import setup_logging
from gui.notifier import QtNotifier
from gui.overlay_window import ScreenOverlayWindow
from infrastructure.wiring import add_pipeline_arguments, build_config, build_use_case


def gui_main(args: Optional[argparse.Namespace] = None) -> None:
    """Open the overlay window and translate the selected region into it."""
    if args is None:
        parser = argparse.ArgumentParser(
            prog="screen-overlay-gui",
            description="Overlay translated text on top of a screen region",
        )
        add_pipeline_arguments(parser)
        args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    screen = app.primaryScreen()
    dpi_scale = screen.devicePixelRatio() if screen is not None else 1.0

    window = ScreenOverlayWindow()
    if args.region is not None:
        window.set_screen_bounds(args.region)
    notifier = QtNotifier(window)
    use_case = build_use_case(args, build_config(args), notifier, dpi_scale=dpi_scale)
    window.show()
    window.start(use_case)
    sys.exit(app.exec())


if __name__ == "__main__":
    gui_main()
