from ..i18n import i18n
from ..models import AccuracyTier, FeedbackCategory

THRESHOLD_EXCELLENT = 90
THRESHOLD_GOOD = 70
THRESHOLD_HINT = 50


def classify_feedback(target: str, recognized: str, accuracy: int) -> FeedbackCategory:
    if accuracy >= THRESHOLD_EXCELLENT:
        return FeedbackCategory.EXCELLENT
    if accuracy >= THRESHOLD_GOOD:
        return FeedbackCategory.GOOD
    if accuracy >= THRESHOLD_HINT:
        target_lower = (target or "").lower()
        recognized_lower = (recognized or "").lower()

        # first match wins
        if "th" in target_lower and "th" not in recognized_lower:
            return FeedbackCategory.TH_SOUND
        if "r" in target_lower and "l" in recognized_lower:
            return FeedbackCategory.R_FOR_L
        if "l" in target_lower and "r" in recognized_lower:
            return FeedbackCategory.L_FOR_R
        return FeedbackCategory.RETRY_SLOWLY
    return FeedbackCategory.LISTEN_AGAIN


def generate_feedback(target: str, recognized: str, accuracy: int, language: str = "en") -> str:
    category = classify_feedback(target, recognized, accuracy)
    return i18n.t(f"feedback.{category.value}", language)


def accuracy_tier(accuracy: int) -> AccuracyTier:
    if accuracy >= THRESHOLD_EXCELLENT:
        return AccuracyTier.GREEN
    if accuracy >= THRESHOLD_GOOD:
        return AccuracyTier.YELLOW
    return AccuracyTier.RED
