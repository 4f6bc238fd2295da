"""
Translation lookup: load_locale (cached JSON) and Translator.t(key, values).
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from app.config import settings

logger = logging.getLogger(__name__)

_LOCALES_DIR = Path(__file__).resolve().parent / "locales"
_CACHE: Dict[str, Dict[str, Any]] = {}


def load_locale(language: str) -> Dict[str, Any]:
    """Load locale JSON for language (en/fr). Cached; unknown language gives {}."""
    if language not in _CACHE:
        path = _LOCALES_DIR / f"{language.lower()}.json"
        if path.exists():
            with path.open(encoding="utf-8") as f:
                _CACHE[language] = json.load(f)
        else:
            logger.warning(f"No locale file for language: {language}")
            _CACHE[language] = {}
    return _CACHE[language]


def resolve_language(language: Optional[str]) -> str:
    """Supported language code, or the default one."""
    if language:
        code = language.strip().lower()[:2]
        if code in settings.get_supported_languages_list():
            return code
    return settings.default_language


def language_from_header(accept_language: Optional[str]) -> str:
    """First supported language in an Accept-Language header."""
    if accept_language:
        for part in accept_language.split(","):
            code = part.split(";")[0].strip().lower()[:2]
            if code in settings.get_supported_languages_list():
                return code
    return settings.default_language


def interpolate(text: str, values: Optional[Mapping[str, Any]]) -> str:
    if not values:
        return text
    for name, value in values.items():
        text = text.replace("{{" + str(name) + "}}", str(value))
    return text


class Translator:
    def __init__(self, language: Optional[str] = None, translations: Optional[Dict[str, Any]] = None):
        self.language = resolve_language(language)
        self._translations = translations

    @property
    def translations(self) -> Dict[str, Any]:
        if self._translations is None:
            return load_locale(self.language)
        return self._translations

    def set_language(self, language: str) -> None:
        self.language = resolve_language(language)
        self._translations = None

    def t(self, key: str, values: Optional[Mapping[str, Any]] = None) -> str:
        """Translate key, falling back to the key itself. Never raises."""
        translations = self.translations

        # Flat keys first; dotted keys are mostly stored flat
        if key in translations:
            value = translations[key]
        else:
            value = translations
            for part in key.split("."):
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    logger.warning(f"Translation key not found: {key}")
                    return key

        if not isinstance(value, str):
            logger.warning(f"Translation value is not a string for key: {key}")
            return key
        return interpolate(value, values)
