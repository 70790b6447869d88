"""
Error taxonomy of the overlay pipeline.

Fatal errors halt a run and are reported once to the user (unless silent);
``TranslationFailed`` is recovered per fragment and never escapes a run.
"""
from __future__ import annotations


class OverlayError(Exception):
    """Base class for every pipeline error."""

    user_visible = True
    default_message = "Screen overlay translation failed"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class AcquisitionCancelled(OverlayError):
    user_visible = False
    default_message = "Screen capture was cancelled"


class CaptureFailed(OverlayError):
    default_message = "The captured image could not be read"


class RecognitionUnavailable(OverlayError):
    default_message = "No OCR service is configured"


class RecognitionFailed(OverlayError):
    default_message = "OCR returned no text"


class NoGeometry(OverlayError):
    default_message = "OCR result has no position data, text cannot be placed on screen"


class TranslationUnavailable(OverlayError):
    default_message = "No translation service is configured"


class TranslationFailed(OverlayError):
    default_message = "Translation of a fragment failed"


class OperationCancelled(OverlayError):
    user_visible = False
    default_message = "Screen overlay translation was cancelled"


class InvalidTransition(Exception):
    """Raised when an overlay element receives an event its state does not accept."""

    def __init__(self, state, event: str) -> None:
        super().__init__(f"'{event}' is not allowed while {state.value}")
        self.state = state
        self.event = event
