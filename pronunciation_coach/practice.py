"""
Practice flow: play the model pronunciation, recognize an attempt, score it.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from datetime import date, datetime, timezone
from typing import Deque, List, Optional

from .capabilities import SpeechRecognizer, SpeechSynthesizer
from .config import DEFAULT_MAX_ATTEMPTS
from .errors import NoSpeechError, SynthesisError
from .i18n import i18n
from .models import PracticeAttempt, SynthesisResult
from .scoring import analyze
from .speech import speech_language_code

logger = logging.getLogger("pronunciation_coach.practice")


class AttemptLog:
    """Bounded in-memory log of recent practice attempts, newest last."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ATTEMPTS) -> None:
        self._entries: Deque[PracticeAttempt] = deque(maxlen=max(1, int(max_entries)))
        self._lock = asyncio.Lock()

    async def add(self, attempt: PracticeAttempt) -> PracticeAttempt:
        async with self._lock:
            self._entries.append(attempt)
            return attempt

    async def list(self, vocabulary_id: Optional[str] = None) -> List[PracticeAttempt]:
        async with self._lock:
            entries = list(self._entries)
        if vocabulary_id is None:
            return entries
        return [a for a in entries if a.vocabulary_id == vocabulary_id]

    async def today(self, now: Optional[datetime] = None) -> List[PracticeAttempt]:
        current = now or datetime.now(timezone.utc)
        day = current.astimezone(timezone.utc).date()
        entries = await self.list()
        return [a for a in entries if _attempt_day(a) == day]


def _attempt_day(attempt: PracticeAttempt) -> Optional[date]:
    try:
        stamp = datetime.fromisoformat(attempt.session_date)
    except ValueError:
        return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.astimezone(timezone.utc).date()


class PronunciationPractice:
    def __init__(
        self,
        recognizer: SpeechRecognizer,
        synthesizer: Optional[SpeechSynthesizer] = None,
        *,
        language: str = "en",
        feedback_language: str = "en",
        attempt_log: Optional[AttemptLog] = None,
    ) -> None:
        self.recognizer = recognizer
        self.synthesizer = synthesizer
        self.language = language
        self.feedback_language = feedback_language
        self.attempt_log = attempt_log

    async def demonstrate(self, word: str) -> SynthesisResult:
        if self.synthesizer is None:
            raise SynthesisError("speech synthesis is not available")
        locale = speech_language_code(self.language)
        logger.info(f"demonstrate word={word!r} locale={locale}")
        return await self.synthesizer.speak(word, language=locale)

    async def attempt(
        self,
        target: str,
        audio_path: str,
        *,
        vocabulary_id: Optional[str] = None,
    ) -> PracticeAttempt:
        recognition = await self.recognizer.recognize(audio_path, language=self.language)
        transcript = (recognition.transcript or "").strip()
        if not transcript:
            raise NoSpeechError(i18n.t("status.no_speech", self.feedback_language))

        analysis = analyze(target, transcript, language=self.feedback_language)
        record = PracticeAttempt(
            vocabulary_id=vocabulary_id,
            target_word=analysis.target_word,
            recognized_word=analysis.recognized_word,
            accuracy=analysis.accuracy,
            feedback=analysis.feedback,
            language=self.language,
            confidence=recognition.confidence,
        )
        logger.info(
            f"attempt target={target!r} recognized={transcript!r} accuracy={record.accuracy} "
            f"confidence={record.confidence}"
        )
        if self.attempt_log is not None:
            await self.attempt_log.add(record)
        return record
