"""
Translation and localization utilities for multi-language support.

Resolves language and locale tags ('en', 'fr', 'en-US', 'fr_FR') to Babel
locales, and holds the magnitude words used when labelling large numbers.

Uses Babel for localization with automatic fallback to English.
"""
from typing import Dict

from babel import Locale

from utilitybelt.logging_config import get_logger

logger = get_logger(__name__)

# Languages with their own magnitude words. Any other language uses English.
SUPPORTED_LANGUAGES = ("en", "fr")

MAGNITUDE_LABELS: Dict[str, Dict[str, str]] = {
    "en": {"trillion": "Trillion", "billion": "Billion", "million": "Million"},
    "fr": {"trillion": "Trillion", "billion": "Milliard", "million": "Million"},
    }

MAGNITUDE_SHORT_LABELS: Dict[str, Dict[str, str]] = {
    "en": {"trillion": "T", "billion": "B", "million": "M"},
    "fr": {"trillion": "T", "billion": "G", "million": "M"},
    }


def get_babel_locale(language: str) -> Locale:
    """
    Get Babel Locale object for given language or locale tag.
    Accepts both BCP 47 ('en-US') and POSIX ('en_US') separators.
    Falls back to English if the tag is not supported.

    Args:
        language: Language code (e.g., 'en', 'fr') or locale tag (e.g., 'en-US', 'fr_FR')

    Returns:
        Babel Locale object

    Examples:
        >>> get_babel_locale('fr-FR').territory
        'FR'
        >>> get_babel_locale('invalid_lang').language  # Falls back to 'en'
        'en'
    """
    try:
        return Locale.parse(str(language).strip().replace("-", "_"))
    except Exception as e:
        logger.warning(
            "Language not supported, falling back to English",
            language=language,
            error=str(e)
            )
        return Locale.parse('en')


def get_magnitude_labels(language: str, short_label: bool = False) -> Dict[str, str]:
    """Magnitude words for a language, English when the language has none."""
    table = MAGNITUDE_SHORT_LABELS if short_label else MAGNITUDE_LABELS
    return table.get(str(language).lower(), table["en"])


def magnitude_plural_suffix(language: str, short_label: bool, value) -> str:
    """French long labels take an 's' from 2 upwards ('2.00 Millions')."""
    if not short_label and str(language).lower() == "fr" and value >= 2:
        return "s"
    return ""
