"""
Pronunciation scoring by edit distance between a target word and a transcript.
"""

from .distance import edit_distance
from .feedback import accuracy_tier, classify_feedback, generate_feedback
from .scorer import analyze, compute_accuracy, normalize_word

__all__ = [
    "accuracy_tier",
    "analyze",
    "classify_feedback",
    "compute_accuracy",
    "edit_distance",
    "generate_feedback",
    "normalize_word",
]
