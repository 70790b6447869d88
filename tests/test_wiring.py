import argparse

import pytest

from adapters.file_capture import ImageFileCapture
from adapters.mss_capture import MssScreenCapture
from domain.models import Rect
from infrastructure.wiring import add_pipeline_arguments, build_config, build_use_case, parse_region


def _parse(*argv):
    parser = argparse.ArgumentParser()
    add_pipeline_arguments(parser)
    return parser.parse_args(list(argv))


def test_parse_region():
    assert parse_region("10, 20,300,40") == Rect(10, 20, 300, 40)


@pytest.mark.parametrize("value", ["1,2,3", "a,b,c,d"])
def test_parse_region_rejects_bad_values(value):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_region(value)


def test_command_line_overrides_environment(monkeypatch):
    monkeypatch.setenv("OVERLAY_TARGET_LANG", "ja")
    monkeypatch.setenv("OVERLAY_TRANSLATOR_URL", "http://env/translate")

    config = build_config(_parse("--target-lang", "ko"))

    assert config.target_lang == "ko"
    assert config.translator_url == "http://env/translate"


def test_image_source_builds_file_capture(tmp_path):
    args = _parse("--image", str(tmp_path / "a.png"), "--ocr-json", str(tmp_path / "a.json"))

    use_case = build_use_case(args, build_config(args), notifier=None)

    assert isinstance(use_case._capture, ImageFileCapture)
    assert use_case._ocr is not None
    assert use_case._translator is not None


def test_region_source_without_ocr(monkeypatch):
    monkeypatch.delenv("OVERLAY_TRANSLATOR_URL", raising=False)
    args = _parse("--region", "0,0,100,50")

    use_case = build_use_case(args, build_config(args), notifier=None, dpi_scale=2.0)

    assert isinstance(use_case._capture, MssScreenCapture)
    assert use_case._ocr is None
