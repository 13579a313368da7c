"""
Cookie utilities.
"""
from utilitybelt.logging_config import get_logger

logger = get_logger(__name__)


def parse_value_from_cookie(cookie_value: str, search_key: str) -> str:
    """
    Extract the value of a key from a cookie string.

    Args:
        cookie_value: Raw cookie header ('theme=dark; lang=fr')
        search_key: Key to look for, with or without the trailing '='

    Returns:
        The value, or '' when the key is absent or the input is empty

    Examples:
        >>> parse_value_from_cookie("theme=dark; lang=fr", "lang")
        'fr'
        >>> parse_value_from_cookie("theme=dark", "lang")
        ''
    """
    if not cookie_value or not search_key:
        return ""

    try:
        key_prefix = search_key if "=" in search_key else f"{search_key}="
        for part in cookie_value.split(";"):
            if part.strip().startswith(key_prefix):
                return part.split("=")[1].strip()
    except (AttributeError, TypeError) as e:
        logger.error("Error parsing cookie value", error=str(e))

    return ""
