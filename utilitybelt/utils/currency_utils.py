"""
Currency utilities with multi-language support via Babel.

Provides currency names and symbols (fiat from the Babel/CLDR tables, crypto and
commodities from fixed tables), amount formatting with a symbol or ISO code,
and magnitude labelling of amounts.

Formatted amounts always use a narrow no-break space as thousands separator
and a dot as decimal separator. The locale only decides where the currency
marker and the minus sign go, and which symbol is shown.

Usage:
    from utilitybelt.utils.currency_utils import format_currency_amount, label_currency

    format_currency_amount(-1234.56, "USD")                         # 'USD -1 234.56'
    format_currency_amount(1234.56, "EUR", locale_format="fr-FR")   # '1 234.56 EUR'
    label_currency(2500000, "fr", "EUR", "name")                    # "2.50 Millions d'Euros"
"""
import re
import unicodedata
from decimal import localcontext
from typing import Dict, Optional

from babel import Locale
from babel.numbers import format_currency, get_currency_name
from babel.numbers import get_currency_symbol as get_babel_currency_symbol

from utilitybelt.logging_config import get_logger
from utilitybelt.utils.number_utils import (
    format_decimal_value,
    normalize_negative_zero,
    render_grouped,
    round_up_decimal,
    split_magnitude,
    truncate_decimal,
    working_precision,
    )
from utilitybelt.utils.string_utils import capitalize_first_letter_only
from utilitybelt.utils.translation_utils import get_babel_locale, get_magnitude_labels, magnitude_plural_suffix
from utilitybelt.utils.validation_utils import (
    InvalidInputError,
    InvalidParameterError,
    fallback_on_invalid,
    require_decimal,
    resolve_decimal_bounds,
    )

logger = get_logger(__name__)

# Useful link: https://www.xe.com/symbols.php
_MAINNET_CRYPTOCURRENCIES_SYMBOLS = {
    "BTC": "₿",  # Bitcoin
    "SAT": "丰",  # Satoshi
    "ADA": "₳",  # Cardano
    "DOGE": "Ð",  # Dogecoin
    "ETH": "Ξ",  # Ethereum
    "LTC": "Ł",  # Litecoin
    "XTZ": "ꜩ",  # Tezos
    "USDT": "₮",  # Tether
    }

# Testnet coins share the mainnet symbol with a 't' in front
CRYPTOCURRENCIES_SYMBOLS: Dict[str, str] = {
    **_MAINNET_CRYPTOCURRENCIES_SYMBOLS,
    **{f"T{code}": f"t{symbol}" for code, symbol in _MAINNET_CRYPTOCURRENCIES_SYMBOLS.items()},
    }

# Names that Babel does not know or gets wrong. '{s}' marks where the plural 's' goes.
_MAINNET_CRYPTOCURRENCIES_NAMES = {
    "BTC": "Bitcoin{s}",
    "SAT": "Satoshi{s}",
    "ADA": "Cardano",
    "ALGO": "Algorand",
    "ARB": "Arbitrum",
    "ATOM": "Cosmos",
    "AVAX": "Avalanche",
    "BNB": "Binance Coin{s}",
    "DOGE": "Dogecoin{s}",
    "DOT": "Polkadot",
    "ETH": "Ethereum",
    "FTM": "Fantom",
    "LTC": "Litecoin{s}",
    "MATIC": "Polygon",
    "NEAR": "Near",
    "OP": "Optimism",
    "SOL": "Solana",
    "TRX": "Tron",
    "VET": "VeChain",
    "XLM": "Stellar",
    "XRP": "Ripple",
    "XTZ": "Tezos",
    "USDC": "USD Coin{s}",
    "USDT": "Tether{s}",
    }

CURRENCY_NAMES: Dict[str, Dict[str, str]] = {
    "en": {
        **_MAINNET_CRYPTOCURRENCIES_NAMES,
        **{f"T{code}": f"Testnet {name}" for code, name in _MAINNET_CRYPTOCURRENCIES_NAMES.items()},
        "XAU": "Gold Troy Ounce{s}",
        "XAG": "Silver Troy Ounce{s}",
        },
    "fr": {
        "XAU": "Once{s} troy d'or",
        "XAG": "Once{s} troy d'argent",
        },
    }

CURRENCY_DISPLAYS = ("code", "narrowSymbol", "symbol")
LABEL_CURRENCY_DISPLAYS = CURRENCY_DISPLAYS + ("name", "none")

# From the first digit to the last one, separators included
_NUMBER_SPAN = re.compile(r"\d(?:.*\d)?")

# Country part of a symbol, before ('US$', 'CA$') or after ('$US', '$CA') the sign
_SYMBOL_PREFIX = re.compile(r"^([A-Z]+)([^A-Za-z].*)$")
_SYMBOL_SUFFIX = re.compile(r"^([^A-Za-z].*?)([A-Z]+)$")


def _normalize_code(currency) -> str:
    if not isinstance(currency, str) or not currency.strip():
        raise InvalidInputError("invalid currency code, expected a non-empty string", detail={"currency": repr(currency)})
    return currency.strip().upper()


def _require_display(currency_display, allowed) -> str:
    if currency_display not in allowed:
        raise InvalidParameterError(
            f"invalid currency_display parameter {currency_display!r}. Must be one of {', '.join(allowed)}",
            detail={"currency_display": repr(currency_display)}
            )
    return currency_display


def _narrow_symbol(symbol: str, currency: str) -> str:
    """
    Drop the country part of a symbol when it comes from the currency code,
    whether it is written before ('US$') or after ('$US') the sign.

    Examples:
        >>> _narrow_symbol("US$", "USD"), _narrow_symbol("$US", "USD")
        ('$', '$')
        >>> _narrow_symbol("R$", "BRL")
        'R$'
    """
    match = _SYMBOL_PREFIX.match(symbol)
    if match and currency.startswith(match.group(1)):
        return match.group(2)

    match = _SYMBOL_SUFFIX.match(symbol)
    if match and currency.startswith(match.group(2)):
        return match.group(1)

    return symbol


def _fixed_currency_name(code: str, lang: str, plural: bool) -> Optional[str]:
    template = CURRENCY_NAMES.get(lang, {}).get(code) or CURRENCY_NAMES["en"].get(code)
    if template is None:
        return None
    return template.format(s="s" if plural else "")


def _babel_symbol(code: str, locale: Locale, is_narrow_symbol: bool) -> str:
    symbol = get_babel_currency_symbol(code, locale=locale)
    return _narrow_symbol(symbol, code) if is_narrow_symbol else symbol


# ============================================================================
# LOOKUPS
# ============================================================================

def currency_exists(currency, lang: str = "en") -> bool:
    """
    Check if Babel knows a display name for a currency code.

    Examples:
        >>> currency_exists("usd")
        True
        >>> currency_exists("BTC")  # Not an ISO 4217 currency
        False
    """
    try:
        code = _normalize_code(currency)
        return get_currency_name(code, locale=get_babel_locale(lang)) != code
    except Exception as e:
        logger.debug("currency_exists: lookup failed", currency=repr(currency), error=str(e))
        return False


def get_currency_full_name(currency, lang: str = "en", plural: bool = False) -> str:
    """
    Get the full name of a currency in the given language.

    Crypto, testnet and commodity (XAU, XAG) names come from a fixed table.
    Fiat names come from Babel, with the first letter capitalized.
    Unknown codes are returned unchanged.

    Args:
        currency: Currency code, case-insensitive (e.g. 'usd', 'EUR', 'BTC')
        lang: Language code, case-insensitive (default: 'en')
        plural: Return the plural form (default: False)

    Returns:
        Currency name, or the uppercase code when it is not recognized

    Examples:
        >>> get_currency_full_name("BTC", plural=True)
        'Bitcoins'
        >>> get_currency_full_name("XAU", "fr", True)
        "Onces troy d'or"
        >>> get_currency_full_name("EUR", "fr")
        'Euro'
        >>> get_currency_full_name("ABC")
        'ABC'
    """
    try:
        code = _normalize_code(currency)
    except InvalidInputError as e:
        logger.error(f"get_currency_full_name: {e.message}", **e.detail)
        return str(currency)

    language = str(lang).strip().lower()

    fixed_name = _fixed_currency_name(code, language, plural)
    if fixed_name is not None:
        return fixed_name

    try:
        if not currency_exists(code):
            return code
        name = get_currency_name(code, count=2 if plural else None, locale=get_babel_locale(language))
        return capitalize_first_letter_only(name, False)
    except Exception as e:
        logger.error("get_currency_full_name unsuccessful", currency=code, error=str(e))
        return code


def get_currency_symbol(currency, is_narrow_symbol: bool = False, locale_format: str = "en-US") -> str:
    """
    Get the symbol of a currency.

    Args:
        currency: Currency code, case-insensitive
        is_narrow_symbol: Drop the country prefix, '$' instead of 'US$' (default: False)
        locale_format: Locale whose symbol table is used (default: 'en-US')

    Returns:
        The symbol, or the uppercase code when the currency has no symbol

    Examples:
        >>> get_currency_symbol("BTC")
        '₿'
        >>> get_currency_symbol("TETH")
        'tΞ'
        >>> get_currency_symbol("CAD"), get_currency_symbol("CAD", True)
        ('CA$', '$')
        >>> get_currency_symbol("RUB")
        'RUB'
    """
    try:
        code = _normalize_code(currency)
    except InvalidInputError as e:
        logger.error(f"get_currency_symbol: {e.message}", **e.detail)
        return str(currency)

    if code in CRYPTOCURRENCIES_SYMBOLS:
        return CRYPTOCURRENCIES_SYMBOLS[code]

    try:
        symbol = _babel_symbol(code, get_babel_locale(locale_format), is_narrow_symbol)
        return re.sub(r"\d", "", symbol).strip() or code
    except Exception as e:
        logger.error("get_currency_symbol unsuccessful", currency=code, error=str(e))
        return code


# ============================================================================
# FORMATTING
# ============================================================================

def _currency_pattern(locale: Locale, currency_display: str) -> str:
    """
    Standard currency pattern of a locale, with the code instead of the symbol in 'code' display.

    Examples (en_US):
        'symbol' -> '¤#,##0.00'
        'code'   -> '¤¤ #,##0.00'
    """
    pattern = locale.currency_formats["standard"].pattern
    if currency_display != "code":
        return pattern

    pattern = pattern.replace("¤", "¤¤")
    pattern = re.sub(r"¤¤(?=[#0])", "¤¤\u00a0", pattern)
    return re.sub(r"(?<=[#0])¤¤", "\u00a0¤¤", pattern)


def _is_symbol_or_space(char: str) -> bool:
    return unicodedata.category(char)[0] in ("S", "Z")


def _space_letter_marker(text: str, marker: str) -> str:
    """
    Separate the number from a marker that touches it with a letter, like CLDR currency spacing.

    Examples:
        >>> _space_letter_marker("USDC5.00", "USDC")
        'USDC\\xa05.00'
        >>> _space_letter_marker("$5.00", "$")
        '$5.00'
    """
    if not marker:
        return text

    escaped = re.escape(marker)
    if not _is_symbol_or_space(marker[-1]):
        text = re.sub(escaped + r"(?=-?\d)", lambda match: match.group(0) + "\u00a0", text, count=1)
    if not _is_symbol_or_space(marker[0]):
        text = re.sub(r"(?<=\d)" + escaped, lambda match: "\u00a0" + match.group(0), text, count=1)
    return text


def _insert_minus_before_number(text: str) -> str:
    first_digit = re.search(r"\d", text)
    if first_digit is None:
        return text
    return f"{text[:first_digit.start()]}-{text[first_digit.start():]}"


@fallback_on_invalid(echo_argument="amount")
def format_currency_amount(
    amount,
    currency: str = "EUR",
    is_rounded: bool = False,
    maximum_decimal: int = 2,
    minimum_decimal: int = 2,
    currency_display: str = "code",
    minus_in_front_of_number: bool = True,
    locale_format: str = "en-US"
    ) -> str:
    """
    Format an amount and add its currency code or symbol.

    The amount is truncated (or rounded up when is_rounded) to maximum_decimal
    places. Babel lays out the currency marker for locale_format, using the last
    three letters of the code as ISO 4217 allows no more, then the full code or
    the crypto symbol is put back.

    Args:
        amount: Number or string representation of a number
        currency: Currency code, case-insensitive (default: 'EUR')
        is_rounded: Round up instead of truncating (default: False)
        maximum_decimal: Maximum displayed decimals (default: 2)
        minimum_decimal: Minimum displayed decimals (default: 2)
        currency_display: 'code' ('USD'), 'symbol' ('US$') or 'narrowSymbol' ('$') (default: 'code')
        minus_in_front_of_number: Put the minus sign right before the first digit (default: True)
        locale_format: Locale deciding marker position and symbol (default: 'en-US')

    Returns:
        Formatted amount, or str(amount) on invalid input

    Examples:
        >>> format_currency_amount(1234.5678, "USD")
        'USD 1 234.56'
        >>> format_currency_amount(-1234.56, "USD", currency_display="symbol")
        '$-1 234.56'
        >>> format_currency_amount(-1234.56, "USD", currency_display="symbol", minus_in_front_of_number=False)
        '-$1 234.56'
        >>> format_currency_amount(0.5, "BTC", currency_display="symbol", locale_format="fr-FR")
        '0.50 ₿'
    """
    value = require_decimal(amount, "amount")
    maximum_decimal, minimum_decimal = resolve_decimal_bounds(
        maximum_decimal, minimum_decimal, "format_currency_amount"
        )
    code = _normalize_code(currency)
    _require_display(currency_display, CURRENCY_DISPLAYS)

    processed = round_up_decimal(value, maximum_decimal) if is_rounded else truncate_decimal(value, maximum_decimal)
    processed = normalize_negative_zero(processed)
    move_minus = minus_in_front_of_number and processed < 0

    crypto_symbol = CRYPTOCURRENCIES_SYMBOLS.get(code, "") if currency_display != "code" else ""
    shorted_code = code[-3:]
    locale = get_babel_locale(locale_format)

    try:
        # Without a sign Babel leaves no locale minus behind ('-', U+2212, bidi marks)
        rendered = processed.copy_abs() if move_minus else processed
        with localcontext() as ctx:
            ctx.prec = working_precision(rendered, maximum_decimal)
            text = format_currency(
                rendered,
                shorted_code,
                format=_currency_pattern(locale, currency_display),
                locale=locale,
                currency_digits=False,
                decimal_quantization=False
                )

        marker = code
        if currency_display != "code":
            babel_symbol = get_babel_currency_symbol(shorted_code, locale=locale)
            shown_symbol = babel_symbol
            if currency_display == "narrowSymbol":
                shown_symbol = _narrow_symbol(babel_symbol, shorted_code)
                text = text.replace(babel_symbol, shown_symbol, 1)
            marker = crypto_symbol or shown_symbol.replace(shorted_code, code, 1)
    except Exception as e:
        raise InvalidParameterError(
            "currency formatting failed",
            detail={"currency": code, "locale_format": repr(locale_format), "error": str(e)}
            ) from e

    text = text.replace(shorted_code, crypto_symbol or code, 1)

    # Digits rendered by Babel are replaced so separators never depend on the locale
    digits = render_grouped(processed.copy_abs(), minimum_decimal, maximum_decimal)
    text = _NUMBER_SPAN.sub(lambda _: digits, text, count=1)

    if move_minus:
        text = _insert_minus_before_number(text)

    return _space_letter_marker(text, marker)


@fallback_on_invalid(echo_argument="amount")
def label_currency(
    amount,
    lang: str = "en",
    currency: str = "EUR",
    currency_display: str = "code",
    short_label: bool = False,
    is_rounded: bool = False,
    maximum_decimal: int = 2,
    minimum_decimal: int = 2
    ) -> str:
    """
    Label an amount by million, billion or trillion and add the currency.

    Args:
        amount: Number or string representation of a number
        lang: 'en' or 'fr', any other language uses English labels (default: 'en')
        currency: Currency code, case-insensitive (default: 'EUR')
        currency_display: 'code', 'symbol', 'narrowSymbol', 'name' (full name) or 'none' (default: 'code')
        short_label: Use M/B/T ('G' for French billions) instead of words (default: False)
        is_rounded: Round half-up instead of truncating (default: False)
        maximum_decimal: Maximum displayed decimals (default: 2)
        minimum_decimal: Minimum displayed decimals (default: 2)

    Returns:
        Labelled amount, or str(amount) on invalid input

    Examples:
        >>> label_currency(1234567, currency="USD")
        '1.23 Million USD'
        >>> label_currency(2500000000, "fr", "BTC", "symbol", True)
        '2.50 G ₿'
        >>> label_currency(3000000, "fr", "EUR", "name")
        "3.00 Millions d'Euros"
        >>> label_currency(0.01, currency="USD")
        '0.01 USD'
    """
    value = require_decimal(amount, "amount")
    maximum_decimal, minimum_decimal = resolve_decimal_bounds(maximum_decimal, minimum_decimal, "label_currency")
    code = _normalize_code(currency)
    _require_display(currency_display, LABEL_CURRENCY_DISPLAYS)
    language = str(lang).strip().lower()

    if currency_display == "name":
        prefix = ("d'" if code == "EUR" else "de ") if language == "fr" else ""
        currency_text = f" {prefix}{get_currency_full_name(code, language, value > 1)}"
    elif currency_display in ("symbol", "narrowSymbol"):
        currency_text = f" {get_currency_symbol(code, currency_display == 'narrowSymbol')}"
    elif currency_display == "code":
        currency_text = f" {code}"
    else:
        currency_text = ""

    magnitude, divided = split_magnitude(value)
    if magnitude is None:
        return f"{format_decimal_value(value, is_rounded, maximum_decimal, minimum_decimal)}{currency_text}"

    label = get_magnitude_labels(language, short_label)[magnitude]
    suffix = magnitude_plural_suffix(language, short_label, divided)
    formatted = format_decimal_value(divided, is_rounded, maximum_decimal, minimum_decimal)
    return f"{formatted} {label}{suffix}{currency_text}"
