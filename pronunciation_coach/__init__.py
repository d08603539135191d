"""
Pronunciation Coach

Scores spoken attempts at vocabulary words against their target spelling
and drives the listen / speak / score practice loop.
"""

__version__ = "1.0.0"

from .errors import (
    CoachError,
    HostAPIError,
    HostConnectionError,
    NoSpeechError,
    RecognitionError,
    SpeechCapabilityError,
    SynthesisError,
)
from .logging import setup_coach_logging
from .models import (
    AccuracyTier,
    AnalysisResult,
    FeedbackCategory,
    PracticeAttempt,
    RecognitionResult,
    SynthesisResult,
)
from .scoring import (
    accuracy_tier,
    analyze,
    classify_feedback,
    compute_accuracy,
    edit_distance,
    generate_feedback,
)
from .speech import clean_text_for_speech, speech_language_code

__all__ = [
    "__version__",
    # Scoring
    "analyze",
    "compute_accuracy",
    "edit_distance",
    "generate_feedback",
    "classify_feedback",
    "accuracy_tier",
    # Models
    "AnalysisResult",
    "AccuracyTier",
    "FeedbackCategory",
    "PracticeAttempt",
    "RecognitionResult",
    "SynthesisResult",
    # Speech helpers
    "clean_text_for_speech",
    "speech_language_code",
    # Errors
    "CoachError",
    "HostAPIError",
    "HostConnectionError",
    "SpeechCapabilityError",
    "RecognitionError",
    "NoSpeechError",
    "SynthesisError",
    "setup_coach_logging",
]
