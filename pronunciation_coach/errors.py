from __future__ import annotations

from typing import Optional, Type


class CoachError(Exception):
    """Base error for the pronunciation coach."""


class HostConnectionError(CoachError):
    """Raised when the speech host cannot be reached or times out."""


class HostAPIError(CoachError):
    def __init__(self, message: str, status_code: int = 0, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class SpeechCapabilityError(CoachError):
    """Base error for recognizer and synthesizer failures."""


class RecognitionError(SpeechCapabilityError):
    """Raised when speech recognition fails."""


class NoSpeechError(RecognitionError):
    """Raised when recognition produced no usable transcript."""


class SynthesisError(SpeechCapabilityError):
    """Raised when speech synthesis fails or is unavailable."""


def map_host_error(
    error: Exception,
    default: Type[SpeechCapabilityError] = RecognitionError,
) -> SpeechCapabilityError:
    """Map host client exceptions onto the speech capability hierarchy."""
    if isinstance(error, SpeechCapabilityError):
        return error

    if isinstance(error, HostConnectionError):
        return default(f"speech host unavailable: {error}")

    if isinstance(error, HostAPIError):
        message = str(error)
        detail = str(error.detail or "").strip()
        if detail and detail.lower() not in message.lower():
            message = f"{message} ({detail})"
        return default(message)

    return default(str(error))
