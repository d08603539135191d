"""
Value objects exchanged between the scorer, the speech capabilities and callers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FeedbackCategory(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    TH_SOUND = "th_sound"
    R_FOR_L = "r_for_l"
    L_FOR_R = "l_for_r"
    RETRY_SLOWLY = "retry_slowly"
    LISTEN_AGAIN = "listen_again"


class AccuracyTier(str, Enum):
    """Display tier for an accuracy score."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class AnalysisResult(BaseModel):
    """Outcome of comparing one recognized utterance with its target word."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accuracy: int = Field(ge=0, le=100)
    feedback: str
    recognized_word: str = Field(alias="recognizedWord")
    target_word: str = Field(alias="targetWord")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class RecognitionResult(BaseModel):
    transcript: str = ""
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    language: Optional[str] = None


class SynthesisResult(BaseModel):
    text: str
    language: Optional[str] = None
    output_path: Optional[str] = None


class PracticeAttempt(BaseModel):
    """Practice-session record for one scored attempt."""

    model_config = ConfigDict(populate_by_name=True)

    vocabulary_id: Optional[str] = Field(default=None, alias="vocabularyId")
    target_word: str = Field(alias="targetWord")
    recognized_word: str = Field(alias="recognizedWord")
    accuracy: int = Field(ge=0, le=100)
    feedback: str
    language: str = "en"
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    session_date: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="sessionDate",
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


__all__ = [
    "AccuracyTier",
    "AnalysisResult",
    "FeedbackCategory",
    "PracticeAttempt",
    "RecognitionResult",
    "SynthesisResult",
]
