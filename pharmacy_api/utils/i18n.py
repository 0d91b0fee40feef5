"""
Internationalization (i18n) utilities for multi-language support.

Provides translation functions for server-side messages (placeholders,
guidance and fallback texts) in English, Arabic and Sorani Kurdish.
"""

import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

# Default language
DEFAULT_LANGUAGE = "en"

# Supported languages, in the order localized payloads list them
SUPPORTED_LANGUAGES = ["en", "ar", "ku"]

# Language names used in AI prompts
LANGUAGE_NAMES = {
    "en": "English",
    "ar": "Arabic",
    "ku": "Kurdish (Sorani)",
}

# Cache for loaded translations
_translation_cache: Dict[str, Dict[str, str]] = {}


def get_locales_dir() -> Path:
    """Get the locales directory path."""
    return Path(__file__).parent.parent / "locales"


def normalize_language(language: str) -> str:
    """Return a supported language code, falling back to English."""
    code = (language or "").strip().lower().split("-")[0]
    if code in SUPPORTED_LANGUAGES:
        return code
    return DEFAULT_LANGUAGE


def load_translations(language: str) -> Dict[str, str]:
    """
    Load translations for a given language.

    Args:
        language: Language code ('en', 'ar', 'ku')

    Returns:
        Dictionary of translation keys to translated strings
    """
    if language in _translation_cache:
        return _translation_cache[language]

    if language not in SUPPORTED_LANGUAGES:
        logger.warning(f"Unsupported language: {language}, falling back to {DEFAULT_LANGUAGE}")
        language = DEFAULT_LANGUAGE

    translation_file = get_locales_dir() / f"{language}.json"

    if not translation_file.exists():
        logger.warning(f"Translation file not found: {translation_file}, using English")
        if language != DEFAULT_LANGUAGE:
            return load_translations(DEFAULT_LANGUAGE)
        return {}

    try:
        with open(translation_file, "r", encoding="utf-8") as f:
            translations = json.load(f)
            _translation_cache[language] = translations
            logger.debug(f"Loaded {len(translations)} translations for {language}")
            return translations
    except (OSError, ValueError) as e:
        logger.error(f"Error loading translations for {language}: {e}")
        if language != DEFAULT_LANGUAGE:
            return load_translations(DEFAULT_LANGUAGE)
        return {}


def translate(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Translate a key to the specified language.

    Args:
        key: Translation key (e.g., 'chat.invalid')
        language: Target language code
        **kwargs: Format arguments for the translation string

    Returns:
        Translated string, the English string when the key is missing for
        the language, or the key itself if it is missing everywhere
    """
    translations = load_translations(normalize_language(language))
    translation = translations.get(key)
    if translation is None:
        translation = load_translations(DEFAULT_LANGUAGE).get(key, key)

    if kwargs:
        try:
            translation = translation.format(**kwargs)
        except (KeyError, ValueError) as e:
            logger.warning(f"Error formatting translation '{key}': {e}")

    return translation


def localized(key: str, **kwargs) -> Dict[str, str]:
    """Return a message in every supported language: {en, ar, ku}."""
    return {lang: translate(key, lang, **kwargs) for lang in SUPPORTED_LANGUAGES}


def localized_list(key: str, **kwargs) -> Dict[str, list]:
    """Like localized(), but each language value is a one-item list."""
    return {lang: [text] for lang, text in localized(key, **kwargs).items()}
