import pytest

from engine.config import OverlayConfig


def test_defaults(monkeypatch):
    monkeypatch.delenv("OVERLAY_TARGET_LANG", raising=False)

    config = OverlayConfig()

    assert config.target_lang == "en"
    assert config.fallback_target_lang == "zh"
    assert config.concurrency >= 1


def test_from_env_reads_prefixed_variables(monkeypatch):
    monkeypatch.setenv("OVERLAY_TARGET_LANG", "ja")
    monkeypatch.setenv("OVERLAY_MAX_CONCURRENCY", "3")
    monkeypatch.setenv("OVERLAY_TRANSLATOR_TIMEOUT", "2.5")
    monkeypatch.setenv("OVERLAY_TRANSLATOR_API_KEY", "")

    config = OverlayConfig.from_env()

    assert config.target_lang == "ja"
    assert config.max_concurrency == 3
    assert config.concurrency == 3
    assert config.translator_timeout == 2.5
    assert config.translator_api_key == ""


def test_invalid_number_in_env_is_an_error(monkeypatch):
    monkeypatch.setenv("OVERLAY_MAX_CONCURRENCY", "many")

    with pytest.raises(ValueError):
        OverlayConfig.from_env()


def test_merged_ignores_none():
    config = OverlayConfig(target_lang="ko").merged(target_lang=None, translator_url="http://mt/translate")

    assert config.target_lang == "ko"
    assert config.translator_url == "http://mt/translate"
