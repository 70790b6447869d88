from __future__ import annotations

import asyncio
import logging
import os
from typing import List, Optional, Sequence

from domain.cancellation import CancellationToken
from domain.errors import OperationCancelled, TranslationFailed
from domain.models import RecognizedFragment
from domain.ports import LanguageDetectorPort, TranslatorPort

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """Translate every fragment concurrently, replacing its text in place.

    A fragment whose translation fails keeps its original text. Completion
    order carries no meaning; callers re-derive order from geometry.
    """

    def __init__(
        self,
        detector: LanguageDetectorPort,
        translator: TranslatorPort,
        max_concurrency: Optional[int] = None,
        default_source_lang: str = "auto",
        default_target_lang: str = "en",
    ):
        self._detector = detector
        self._translator = translator
        self._max_concurrency = max(1, max_concurrency or os.cpu_count() or 1)
        self._default_source = default_source_lang
        self._default_target = default_target_lang

    async def translate_all(
        self,
        fragments: Sequence[RecognizedFragment],
        token: Optional[CancellationToken] = None,
    ) -> List[RecognizedFragment]:
        """Return *fragments* once every task has finished, failed or been cancelled.

        Raises ``OperationCancelled`` when *token* fires; fragments already
        translated keep their new text.
        """
        token = token or CancellationToken()
        token.raise_if_cancelled()
        fragments = list(fragments)
        if not fragments:
            return fragments

        limit = asyncio.Semaphore(self._max_concurrency)
        tasks = [
            asyncio.create_task(self._translate_one(fragment, limit, token))
            for fragment in fragments
        ]

        loop = asyncio.get_running_loop()

        def _cancel_tasks() -> None:
            for task in tasks:
                task.cancel()

        unregister = token.add_callback(lambda: loop.call_soon_threadsafe(_cancel_tasks))
        try:
            results = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            unregister()

        if token.cancelled:
            logger.info("Translation cancelled")
            raise OperationCancelled()

        translated = sum(1 for r in results if r is True)
        logger.info(f"  Translated {translated}/{len(fragments)} fragment(s)")
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, asyncio.CancelledError):
                logger.error(f"  Unexpected translation task error: {result!r}")
        return fragments

    async def _translate_one(
        self,
        fragment: RecognizedFragment,
        limit: asyncio.Semaphore,
        token: CancellationToken,
    ) -> bool:
        async with limit:
            token.raise_if_cancelled()
            source, target = await self._detect(fragment.text)
            token.raise_if_cancelled()
            try:
                fragment.text = await self._translate(fragment.text, source, target)
            except TranslationFailed as exc:
                logger.warning(f"  {exc} – keeping original: {fragment.text!r}")
                return False
            return True

    async def _detect(self, text: str) -> tuple[str, str]:
        try:
            detection = await self._detector.detect(text)
        except Exception as exc:
            logger.warning(f"  Language detection raised {exc!r} for {text!r}")
            return self._default_source, self._default_target
        if not detection.success:
            logger.warning(f"  Language detection failed: {text!r}")
            return self._default_source, self._default_target
        return detection.source_lang, detection.target_lang

    async def _translate(self, text: str, source: str, target: str) -> str:
        try:
            outcome = await self._translator.translate(text, source, target)
        except (asyncio.CancelledError, OperationCancelled):
            raise
        except Exception as exc:
            raise TranslationFailed(f"Translation raised {exc!r}") from exc
        if not outcome.success or not outcome.text:
            raise TranslationFailed()
        return outcome.text
