from __future__ import annotations

import re

DEFAULT_SPEECH_LANGUAGE = "en-US"

SPEECH_LANGUAGE_CODES: dict[str, str] = {
    "en": "en-US",
    "ja": "ja-JP",
    "ko": "ko-KR",
    "fr": "fr-FR",
    "zh": "zh-CN",
}

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def speech_language_code(language: str | None) -> str:
    """Map an app language (``"ja"``) or locale (``"ja-JP"``) to a speech locale."""
    primary = (language or "").strip().replace("_", "-").split("-", 1)[0].lower()
    return SPEECH_LANGUAGE_CODES.get(primary, DEFAULT_SPEECH_LANGUAGE)


def clean_text_for_speech(text: str | None) -> str:
    cleaned = _NON_WORD_RE.sub("", text or "")
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip().lower()
