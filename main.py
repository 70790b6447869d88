#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from adapters.log_notifier import LogNotifier
from engine.log import setup_logging
from infrastructure.image_renderer import render_result
from infrastructure.wiring import add_pipeline_arguments, build_config, build_use_case


async def run(args: argparse.Namespace) -> int:
    config = build_config(args)
    use_case = build_use_case(args, config, LogNotifier(), dpi_scale=args.dpi_scale)

    result = await use_case.execute()
    print(result.to_json())

    if not result.placements:
        return 1

    if args.render:
        rendered = render_result(result, min_size=config.min_font_size, max_size=config.max_font_size)
        if rendered is None:
            logging.error("Nothing to render: the capture produced no image")
            return 1
        out_dir = os.path.dirname(args.render)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        rendered.save(args.render)
        print(f"✓ {len(result.placements)} block(s) → {args.render}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="screen-overlay",
        description="Translate the text in a screen region and place it where the source text was",
    )
    add_pipeline_arguments(parser)
    parser.add_argument(
        "--dpi-scale", type=float, default=1.0,
        help="Device pixel ratio of the captured screen (default: 1.0)",
    )
    parser.add_argument(
        "--render", metavar="PATH",
        help="Also save the capture with the translations drawn in",
    )
    parser.add_argument(
        "--gui", action="store_true",
        help="Show the result in an interactive overlay window",
    )

    args = parser.parse_args()

    if args.gui:
        if args.render:
            parser.error("--render cannot be combined with --gui")
        from gui.app import gui_main
        gui_main(args=args)
        return

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
