"""
Port interfaces (driven/secondary ports) for the screen overlay domain.

All adapters must conform to these Protocols.
The use-case layer depends ONLY on these abstractions.
"""
from __future__ import annotations

from typing import Optional, Protocol, Tuple, runtime_checkable

from .models import (
    CaptureResult,
    LanguageDetection,
    RecognitionOutcome,
    TranslationOutcome,
)


@runtime_checkable
class CapturePort(Protocol):
    """Acquire the screen region the user selected."""

    async def capture(self) -> Optional[CaptureResult]:
        """Return ``None`` when the user aborted the capture."""
        ...


@runtime_checkable
class OcrPort(Protocol):
    """Recognize text fragments and their shapes in an image."""

    async def recognize(self, image_bytes: bytes, language: str) -> RecognitionOutcome: ...


@runtime_checkable
class TranslatorPort(Protocol):
    """Translate a single piece of text."""

    async def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationOutcome: ...


@runtime_checkable
class LanguageDetectorPort(Protocol):
    """Detect the source language and pick the target it pairs with."""

    async def detect(self, text: str) -> LanguageDetection: ...


@runtime_checkable
class TextMeasurer(Protocol):
    """Measure rendered text, in the same logical unit as ``Rect``."""

    def measure(self, text: str, font_size: float) -> Tuple[float, float]:
        """
        Returns
        -------
        width, height : float – extent of *text* rendered at *font_size*
        """
        ...


@runtime_checkable
class NotifierPort(Protocol):
    """Show a one-off notice to the user."""

    def notify(self, title: str, message: str) -> None: ...
