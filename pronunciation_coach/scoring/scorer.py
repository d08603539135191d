"""
Accuracy scoring for a single recognized utterance.
"""

import logging

from ..models import AnalysisResult
from .distance import edit_distance
from .feedback import generate_feedback

logger = logging.getLogger("pronunciation_coach.scorer")

MAX_ACCURACY = 100


def normalize_word(text: str) -> str:
    return (text or "").strip().lower()


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def compute_accuracy(target: str, recognized: str) -> int:
    """
    Score how close ``recognized`` is to ``target`` on a 0-100 scale.

    Both strings are trimmed and lower-cased first. An empty side scores 0,
    identical strings score 100, anything else scores
    ``round((1 - distance / max_length) * 100)`` with halves rounded up.
    Non-identical pairs stay below 100 and pairs sharing anything stay
    above 0.
    """
    target_norm = normalize_word(target)
    recognized_norm = normalize_word(recognized)

    if not target_norm or not recognized_norm:
        return 0
    if target_norm == recognized_norm:
        return MAX_ACCURACY

    max_length = max(len(target_norm), len(recognized_norm))
    distance = edit_distance(target_norm, recognized_norm)
    matched = max(0, max_length - distance)
    accuracy = _round_half_up(matched * MAX_ACCURACY, max_length)

    if matched > 0:
        accuracy = max(1, accuracy)
    accuracy = max(0, min(MAX_ACCURACY - 1, accuracy))

    logger.debug(
        "accuracy target_len=%d recognized_len=%d distance=%d accuracy=%d",
        len(target_norm),
        len(recognized_norm),
        distance,
        accuracy,
    )
    return accuracy


def analyze(target: str, recognized: str, language: str = "en") -> AnalysisResult:
    """Score an attempt and attach feedback in ``language``."""
    accuracy = compute_accuracy(target, recognized)
    feedback = generate_feedback(target, recognized, accuracy, language=language)
    return AnalysisResult(
        accuracy=accuracy,
        feedback=feedback,
        recognized_word=recognized,
        target_word=target,
    )
