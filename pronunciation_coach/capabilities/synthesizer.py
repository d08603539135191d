from __future__ import annotations

from typing import Any, Protocol

from ..models import SynthesisResult


class SpeechSynthesizer(Protocol):
    async def speak(self, text: str, language: str | None = None, **kwargs: Any) -> SynthesisResult: ...
