"""
Locale catalogs for feedback and status messages.
"""

import json
from pathlib import Path
from typing import Dict

DEFAULT_LANGUAGE = "en"


class I18n:
    def __init__(self, locale_dir: str = "locales"):
        self.locale_dir = Path(__file__).parent / locale_dir
        self.translations: Dict[str, Dict[str, str]] = {}
        self.load_translations()

    def load_translations(self) -> None:
        if not self.locale_dir.exists():
            return
        for file in self.locale_dir.glob("*.json"):
            self.translations[file.stem] = json.loads(file.read_text(encoding="utf-8"))

    @property
    def languages(self) -> list[str]:
        return sorted(self.translations)

    def t(self, key: str, lang: str = DEFAULT_LANGUAGE) -> str:
        primary = (lang or DEFAULT_LANGUAGE).replace("_", "-").split("-", 1)[0].lower()
        if primary in self.translations and key in self.translations[primary]:
            return self.translations[primary][key]
        if DEFAULT_LANGUAGE in self.translations and key in self.translations[DEFAULT_LANGUAGE]:
            return self.translations[DEFAULT_LANGUAGE][key]
        return key


i18n = I18n()
