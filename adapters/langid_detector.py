from __future__ import annotations

import asyncio
import logging

import py3langid as langid

from domain.models import LanguageDetection

logger = logging.getLogger(__name__)


class LangidDetector:
    """Detect the source language with py3langid.

    The target is ``target_lang`` unless the text is already in that
    language, in which case ``fallback_target_lang`` is used.
    """

    def __init__(self, target_lang: str = "en", fallback_target_lang: str = "zh"):
        self._target = target_lang
        self._fallback = fallback_target_lang

    async def detect(self, text: str) -> LanguageDetection:
        if not text or not text.strip():
            return LanguageDetection(success=False, target_lang=self._target)
        source, _score = await asyncio.to_thread(langid.classify, text)
        target = self._fallback if source == self._target else self._target
        logger.debug(f"Detected {source} -> {target} for {text[:20]!r}")
        return LanguageDetection(success=True, source_lang=source, target_lang=target)
