from __future__ import annotations

import asyncio
import logging

import requests

from domain.models import TranslationOutcome

logger = logging.getLogger(__name__)


class HttpTranslator:
    """LibreTranslate-compatible ``POST /translate`` client.

    Requests are blocking and run on the default thread pool so several
    fragments can be in flight at once.
    """

    def __init__(self, url: str, api_key: str = "", timeout: float = 15.0):
        self._url = url
        self._api_key = api_key
        self._timeout = timeout
        self._session = requests.Session()

    async def translate(self, text: str, source_lang: str, target_lang: str) -> TranslationOutcome:
        return await asyncio.to_thread(self._post, text, source_lang, target_lang)

    def _post(self, text: str, source_lang: str, target_lang: str) -> TranslationOutcome:
        payload = {
            "q": text,
            "source": source_lang or "auto",
            "target": target_lang,
            "format": "text",
        }
        if self._api_key:
            payload["api_key"] = self._api_key

        try:
            r = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning(f"Translation request failed: {exc}")
            return TranslationOutcome(success=False)

        if not r.ok:
            logger.warning(f"Translation HTTP {r.status_code}: {r.text[:200]}")
            return TranslationOutcome(success=False)
        try:
            translated = r.json().get("translatedText", "")
        except ValueError:
            logger.warning("Translation response is not JSON")
            return TranslationOutcome(success=False)
        return TranslationOutcome(success=bool(translated), text=translated)
