"""
String manipulation utilities.

Small text helpers used by the number and currency modules (decimal comma
normalization, capitalization) plus general purpose normalization and slugs.

All helpers return an empty string (with an error log) when they are given
something that is not a string, and return blank strings unchanged.
"""
import re
import unicodedata

from utilitybelt.logging_config import get_logger
from utilitybelt.utils.validation_utils import parse_decimal_value

logger = get_logger(__name__)

SPACE_REPLACEMENTS = {
    "remove": "",
    "underscore": "_",
    "dash": "-",
    }

# Emoji blocks (pictographs, dingbats, misc symbols, flags) plus the joiners emoji sequences rely on
_EMOJI_PATTERN = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "\U00002600-\U000027BF"
    "\U00002B00-\U00002BFF"
    "\U0000FE00-\U0000FE0F"
    "\U0000200D"
    "\U000020E3"
    "\U000E0020-\U000E007F"
    "]"
    )


def _is_invalid_string(value, function_name: str) -> bool:
    if not isinstance(value, str):
        logger.error(f"{function_name}: invalid string", value=repr(value))
        return True
    return False


def capitalize_first_letter_only(string: str, is_rest_become_lowercase: bool = True) -> str:
    """
    Capitalize the first letter of a string, optionally lowering the rest.

    Examples:
        >>> capitalize_first_letter_only("hELLO")
        'Hello'
        >>> capitalize_first_letter_only("dollar des États-Unis", False)
        'Dollar des États-Unis'
    """
    if _is_invalid_string(string, "capitalize_first_letter_only"):
        return ""

    if not string.strip():
        return string

    rest = string[1:].lower() if is_rest_become_lowercase else string[1:]
    return string[0].upper() + rest


def replace_last_comma_by_dot(string: str, remove_other_commas: bool = True) -> str:
    """
    Replace the last comma of a string by a dot.

    Useful for numbers written with a decimal comma. Other commas are
    considered thousands separators and removed unless remove_other_commas is False.

    Examples:
        >>> replace_last_comma_by_dot("1,234,56")
        '1234.56'
        >>> replace_last_comma_by_dot("1,234,56", False)
        '1,234.56'
        >>> replace_last_comma_by_dot("1234")
        '1234'
    """
    if _is_invalid_string(string, "replace_last_comma_by_dot"):
        return ""

    if not string.strip():
        return string

    last_index = string.rfind(",")
    if last_index == -1:
        return string

    formatted = f"{string[:last_index]}.{string[last_index + 1:]}"
    return formatted.replace(",", "") if remove_other_commas else formatted


def is_string_contains_number(string: str) -> bool:
    """True if the string contains at least one digit."""
    if _is_invalid_string(string, "is_string_contains_number"):
        return False

    if not string.strip():
        return False

    return re.search(r"\d", string) is not None


def remove_non_numeric_characters(
    string: str,
    have_replace_last_comma_by_dot: bool = True,
    remove_other_commas: bool = True
    ) -> str:
    """
    Keep only digits and dots, plus the minus sign when the string starts with one.

    Examples:
        >>> remove_non_numeric_characters("-1 234,56 €")
        '-1234.56'
        >>> remove_non_numeric_characters("$ 12.5")
        '12.5'
    """
    if _is_invalid_string(string, "remove_non_numeric_characters"):
        return ""

    if not string.strip():
        return string

    if have_replace_last_comma_by_dot:
        string = replace_last_comma_by_dot(string, remove_other_commas)

    pattern = r"[^\d.-]" if string.startswith("-") else r"[^\d.]"
    return re.sub(pattern, "", string)


def remove_numbers_from_string(string: str) -> str:
    """Remove every digit from a string."""
    if _is_invalid_string(string, "remove_numbers_from_string"):
        return ""

    if not string.strip():
        return string

    return re.sub(r"\d", "", string)


def number_to_string(number) -> str:
    """
    Exact string representation of a number, never in scientific notation.

    Examples:
        >>> number_to_string(Decimal("1E-7"))
        '0.0000001'
        >>> number_to_string(None)
        ''
    """
    parsed = parse_decimal_value(number)
    if parsed is None:
        logger.error("number_to_string: invalid number", value=repr(number))
        return ""

    return format(parsed, "f")


def _remove_non_latin(string: str) -> str:
    kept = []
    for char in string:
        category = unicodedata.category(char)
        if (
            char.isascii() and char.isalpha()
            or char.isspace()
            or char.isdigit()
            or category.startswith("P")
            or category in ("Sc", "Mn", "So")
            ):
            kept.append(char)
    return "".join(kept)


def normalize_string(
    string: str,
    space_replacement_type: str = "remove",
    have_remove_diacritic: bool = True,
    have_remove_emoji: bool = True,
    have_remove_non_latin: bool = True,
    have_remove_number: bool = True,
    have_remove_punctuation: bool = True,
    have_remove_special_characters: bool = True
    ) -> str:
    """
    Normalize a string by removing diacritics, emojis, non-Latin characters,
    numbers, punctuation and currency symbols, then replacing spaces.
    Case is never changed.

    Args:
        string: The string to normalize
        space_replacement_type: 'remove', 'underscore', 'dash', or '' to keep spaces
        have_remove_diacritic: Remove accents ('é' -> 'e')
        have_remove_emoji: Remove emojis
        have_remove_non_latin: Remove characters outside the Latin alphabet ('ø' becomes 'o')
        have_remove_number: Remove digits
        have_remove_punctuation: Remove punctuation
        have_remove_special_characters: Remove currency symbols

    Returns:
        The normalized string

    Examples:
        >>> normalize_string("Hello, World!")
        'HelloWorld'
        >>> normalize_string("Hello, World!", "underscore")
        'Hello_World'
        >>> normalize_string("A ticket to 大阪 costs ¥2000 👌.")
        'Atickettocosts'
    """
    if _is_invalid_string(string, "normalize_string"):
        return ""

    if not string.strip():
        return string

    normalized = unicodedata.normalize("NFD", string)

    if have_remove_diacritic:
        normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    if have_remove_emoji:
        normalized = _EMOJI_PATTERN.sub("", normalized)

    if have_remove_non_latin:
        normalized = normalized.replace("ø", "o").replace("Ø", "O")
        normalized = _remove_non_latin(normalized)

    if have_remove_number:
        normalized = re.sub(r"\d", "", normalized)

    if have_remove_punctuation:
        normalized = "".join(char for char in normalized if not unicodedata.category(char).startswith("P"))

    if have_remove_special_characters:
        normalized = "".join(char for char in normalized if unicodedata.category(char) != "Sc")

    replacement = SPACE_REPLACEMENTS.get(space_replacement_type)
    if replacement is not None:
        normalized = re.sub(r"\s+", replacement, normalized.strip())

    return normalized


def slugify_string(string: str, is_become_lowercase: bool = True) -> str:
    """
    URL-friendly slug: normalized string with dashes between words.

    Examples:
        >>> slugify_string("Café au Lait, s'il vous plaît")
        'cafe-au-lait-sil-vous-plait'
    """
    if _is_invalid_string(string, "slugify_string"):
        return ""

    if not string.strip():
        return string

    slug = normalize_string(string, "dash")
    return slug.lower() if is_become_lowercase else slug
