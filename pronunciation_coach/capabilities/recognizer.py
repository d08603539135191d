from __future__ import annotations

from typing import Any, Protocol

from ..models import RecognitionResult


class SpeechRecognizer(Protocol):
    async def recognize(self, audio_path: str, language: str | None = None, **kwargs: Any) -> RecognitionResult: ...
