"""Build the pipeline from command-line arguments; shared by the CLI and the GUI."""
from __future__ import annotations

import argparse
import logging
from typing import Optional

from adapters.file_capture import ImageFileCapture
from adapters.http_translator import HttpTranslator
from adapters.json_ocr import JsonFileOcr
from adapters.langid_detector import LangidDetector
from adapters.mss_capture import MssScreenCapture
from domain.models import Rect
from domain.ports import CapturePort, NotifierPort
from engine.config import OverlayConfig
from use_cases.overlay_translate import OverlayTranslateUseCase

logger = logging.getLogger(__name__)


def parse_region(value: str) -> Rect:
    """``"x,y,w,h"`` in physical screen pixels."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"Expected x,y,w,h but got: {value}")
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Region values must be numbers: {value}")
    return Rect(x, y, w, h)


def add_pipeline_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--image",
        help="Use an image file as the captured region",
    )
    source.add_argument(
        "--region", type=parse_region,
        help="Capture this screen region, x,y,w,h in physical pixels",
    )
    parser.add_argument(
        "--ocr-json",
        help="OCR result for the capture as JSON (text + fragments with box_points)",
    )
    parser.add_argument(
        "--target-lang",
        help="Translation target language (default: en, or OVERLAY_TARGET_LANG)",
    )
    parser.add_argument(
        "--translator-url",
        help="LibreTranslate-compatible /translate endpoint",
    )
    parser.add_argument(
        "--max-concurrency", type=int,
        help="Parallel translation requests (default: CPU count)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )


def build_config(args: argparse.Namespace) -> OverlayConfig:
    return OverlayConfig.from_env().merged(
        target_lang=args.target_lang,
        translator_url=args.translator_url,
        max_concurrency=args.max_concurrency,
    )


def build_capture(args: argparse.Namespace, dpi_scale: float = 1.0) -> CapturePort:
    if args.image:
        return ImageFileCapture(args.image)
    return MssScreenCapture(args.region, dpi_scale=dpi_scale)


def build_use_case(
    args: argparse.Namespace,
    config: OverlayConfig,
    notifier: NotifierPort,
    dpi_scale: float = 1.0,
) -> OverlayTranslateUseCase:
    ocr: Optional[JsonFileOcr] = JsonFileOcr(args.ocr_json) if args.ocr_json else None
    translator: Optional[HttpTranslator] = None
    if config.translator_url:
        translator = HttpTranslator(
            config.translator_url,
            api_key=config.translator_api_key,
            timeout=config.translator_timeout,
        )
    logger.debug(f"Pipeline: ocr={'json' if ocr else 'none'}, translator={config.translator_url or 'none'}")

    return OverlayTranslateUseCase(
        capture=build_capture(args, dpi_scale),
        ocr=ocr,
        translator=translator,
        detector=LangidDetector(config.target_lang, config.fallback_target_lang),
        notifier=notifier,
        config=config,
    )
