"""
Date and time utilities.

Comparison, relative description and timezone helpers over datetime objects,
built on python-dateutil (parsing, timezones, calendar arithmetic) and Babel
(localized relative descriptions such as '3 days ago' or 'il y a 3 jours').

Accepted date inputs:
- datetime (naive values are local time)
- date (midnight, local time)
- ISO-8601 or other dateutil-parseable strings
- int/float epoch timestamps in milliseconds

Invalid dates never raise: they are logged and the function returns False,
an empty string or 0.
"""
import calendar
import os
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Optional

from babel.dates import format_timedelta
from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta

from utilitybelt.logging_config import get_logger
from utilitybelt.utils.translation_utils import get_babel_locale
from utilitybelt.utils.validation_utils import (
    InvalidInputError,
    InvalidParameterError,
    fallback_on_invalid,
    require_positive_int,
    )

logger = get_logger(__name__)

VALID_GRANULARITIES = ("year", "month", "day", "hour", "minute", "second", "millisecond")
VALID_INCLUSIVE_CHECKS = ("()", "[]", "[)", "(]")


# ============================================================================
# PARSING
# ============================================================================

def _parse_raw(value) -> Optional[datetime]:
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value / 1000, tz=tz.tzlocal())
        if isinstance(value, str) and value.strip():
            return date_parser.parse(value.strip())
    except (ValueError, OverflowError, OSError):
        return None

    return None


def parse_datetime(value) -> Optional[datetime]:
    """
    Convert a date-like value to a timezone-aware datetime.

    Returns:
        Aware datetime, or None when the value is not a valid date

    Examples:
        >>> parse_datetime("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=tzutc())
        >>> parse_datetime(0).astimezone(timezone.utc).year
        1970
        >>> parse_datetime("not a date") is None
        True
    """
    parsed = _parse_raw(value)
    if parsed is None:
        return None

    # Naive datetimes are local time
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=tz.tzlocal())


def require_datetime(value, name: str = "date") -> datetime:
    """
    Raises:
        InvalidInputError: If value is not a valid date
    """
    parsed = parse_datetime(value)
    if parsed is None:
        raise InvalidInputError(f"invalid {name}", detail={name: repr(value)})
    return parsed


def _require_granularity(granularity) -> str:
    if granularity not in VALID_GRANULARITIES:
        raise InvalidParameterError(
            f"invalid granularity {granularity!r}. Must be one of {', '.join(VALID_GRANULARITIES)}",
            detail={"granularity": repr(granularity)}
            )
    return granularity


def _local(value: datetime) -> datetime:
    return value.astimezone(tz.tzlocal())


def start_of(value: datetime, granularity: str) -> datetime:
    """
    Truncate a datetime to the start of its year, month, day, hour, minute, second or millisecond.

    Examples:
        >>> start_of(datetime(2024, 5, 17, 13, 45, 12, 345678), "month")
        datetime.datetime(2024, 5, 1, 0, 0)
        >>> start_of(datetime(2024, 5, 17, 13, 45, 12, 345678), "millisecond")
        datetime.datetime(2024, 5, 17, 13, 45, 12, 345000)
    """
    if granularity == "millisecond":
        return value.replace(microsecond=value.microsecond // 1000 * 1000)

    fields = {"month": 1, "day": 1, "hour": 0, "minute": 0, "second": 0, "microsecond": 0}
    keep = VALID_GRANULARITIES.index(granularity)
    # Fields finer than the granularity are reset
    reset = {name: default for index, (name, default) in enumerate(fields.items()) if index >= keep}
    return value.replace(**reset)


def _format(value: datetime) -> str:
    """ISO-8601 without fractional seconds, 'Z' for UTC."""
    text = value.isoformat(timespec="seconds")
    return text[:-6] + "Z" if text.endswith("+00:00") and value.tzinfo in (timezone.utc, tz.UTC) else text


# ============================================================================
# RELATIVE DESCRIPTIONS
# ============================================================================

def _describe(delta: timedelta, lang: str, without_suffix: bool) -> str:
    return format_timedelta(delta, add_direction=not without_suffix, locale=get_babel_locale(lang))


@fallback_on_invalid(default="")
def get_string_difference_from_now(date_value, lang: str = "en", without_suffix: bool = False) -> str:
    """
    Describe a date relative to now.

    Examples:
        >>> get_string_difference_from_now(datetime.now() - timedelta(days=3))
        '3 days ago'
        >>> get_string_difference_from_now(datetime.now() + timedelta(hours=2), "fr")
        'dans 2 heures'
    """
    moment = require_datetime(date_value)
    return _describe(moment - datetime.now(tz.tzlocal()), lang, without_suffix)


@fallback_on_invalid(default="")
def get_string_difference_to_now(date_value, lang: str = "en", without_suffix: bool = False) -> str:
    """
    Describe now relative to a date, the reverse of get_string_difference_from_now().

    Examples:
        >>> get_string_difference_to_now(datetime.now() - timedelta(days=3))
        'in 3 days'
    """
    moment = require_datetime(date_value)
    return _describe(datetime.now(tz.tzlocal()) - moment, lang, without_suffix)


@fallback_on_invalid(default="")
def get_string_difference_from_datetime(
    from_date,
    base_date=None,
    lang: str = "en",
    without_suffix: bool = False
    ) -> str:
    """
    Describe base_date (default: now) relative to from_date.

    Examples:
        >>> get_string_difference_from_datetime("2024-01-01", "2024-01-04")
        'in 3 days'
    """
    origin = require_datetime(from_date, "from_date")
    base = datetime.now(tz.tzlocal()) if base_date is None else require_datetime(base_date, "base_date")
    return _describe(base - origin, lang, without_suffix)


@fallback_on_invalid(default="")
def get_string_difference_to_datetime(
    to_date,
    base_date=None,
    lang: str = "en",
    without_suffix: bool = False
    ) -> str:
    """
    Describe to_date relative to base_date (default: now).

    Examples:
        >>> get_string_difference_to_datetime("2024-01-01", "2024-01-04")
        '3 days ago'
    """
    target = require_datetime(to_date, "to_date")
    base = datetime.now(tz.tzlocal()) if base_date is None else require_datetime(base_date, "base_date")
    return _describe(target - base, lang, without_suffix)


# ============================================================================
# COMPARISONS
# ============================================================================

@fallback_on_invalid(default=False)
def is_date_between(date_value, start_date, end_date, granularity: str = "day", inclusive_check: str = "()") -> bool:
    """
    Check if a date lies between two others, compared at the given granularity.

    Args:
        date_value: Date to check
        start_date: One bound (bounds may be given in either order)
        end_date: The other bound
        granularity: 'year', 'month', 'day', 'hour', 'minute', 'second' or 'millisecond' (default: 'day')
        inclusive_check: '()' exclusive, '[]' inclusive, '[)' or '(]' (default: '()')

    Examples:
        >>> is_date_between("2024-01-15", "2024-01-01", "2024-01-31")
        True
        >>> is_date_between("2024-01-01", "2024-01-01", "2024-01-31")
        False
        >>> is_date_between("2024-01-01", "2024-01-01", "2024-01-31", inclusive_check="[)")
        True
    """
    moment = require_datetime(date_value)
    start = require_datetime(start_date, "start_date")
    end = require_datetime(end_date, "end_date")
    _require_granularity(granularity)
    if inclusive_check not in VALID_INCLUSIVE_CHECKS:
        raise InvalidParameterError(
            f"invalid inclusive_check {inclusive_check!r}. Must be one of {', '.join(VALID_INCLUSIVE_CHECKS)}",
            detail={"inclusive_check": repr(inclusive_check)}
            )

    moment, start, end = (start_of(_local(value), granularity) for value in (moment, start, end))
    low, high = (start, end) if start <= end else (end, start)

    after_low = moment >= low if inclusive_check[0] == "[" else moment > low
    before_high = moment <= high if inclusive_check[1] == "]" else moment < high
    return after_low and before_high


@fallback_on_invalid(default=False)
def is_date_same(date_value, date_to_compare, granularity: str = "day") -> bool:
    """True if both dates fall in the same year, month, day... (local time)."""
    moment = require_datetime(date_value)
    other = require_datetime(date_to_compare, "date_to_compare")
    _require_granularity(granularity)
    return start_of(_local(moment), granularity) == start_of(_local(other), granularity)


@fallback_on_invalid(default=False)
def is_date_same_or_before(date_value, date_to_compare, granularity: str = "day") -> bool:
    moment = require_datetime(date_value)
    other = require_datetime(date_to_compare, "date_to_compare")
    _require_granularity(granularity)
    return start_of(_local(moment), granularity) <= start_of(_local(other), granularity)


@fallback_on_invalid(default=False)
def is_date_same_or_after(date_value, date_to_compare, granularity: str = "day") -> bool:
    moment = require_datetime(date_value)
    other = require_datetime(date_to_compare, "date_to_compare")
    _require_granularity(granularity)
    return start_of(_local(moment), granularity) >= start_of(_local(other), granularity)


def _local_day_offset(date_value) -> int:
    moment = _local(require_datetime(date_value))
    return (moment.date() - datetime.now(tz.tzlocal()).date()).days


@fallback_on_invalid(default=False)
def is_date_yesterday(date_value) -> bool:
    return _local_day_offset(date_value) == -1


@fallback_on_invalid(default=False)
def is_date_today(date_value) -> bool:
    return _local_day_offset(date_value) == 0


@fallback_on_invalid(default=False)
def is_date_tomorrow(date_value) -> bool:
    return _local_day_offset(date_value) == 1


@fallback_on_invalid(default=False)
def is_date_leap_year(date_value) -> bool:
    """
    Examples:
        >>> is_date_leap_year("2024-06-01"), is_date_leap_year("2100-06-01")
        (True, False)
    """
    return calendar.isleap(_local(require_datetime(date_value)).year)


# ============================================================================
# CALENDAR COUNTS
# ============================================================================

@fallback_on_invalid(default=0)
def how_many_leap_day_in_last_years(years: int, from_today: bool = True) -> int:
    """
    Count the leap days (February 29th) in the last `years` years.

    Args:
        years: Number of years to look back, positive integer
        from_today: Count back from today, otherwise from January 1st of the current year (default: True)

    Returns:
        Number of leap days, or 0 on invalid input
    """
    require_positive_int(years, "years")

    initial = datetime.now(tz.tzlocal())
    if not from_today:
        initial = start_of(initial, "year")

    return (initial - (initial - relativedelta(years=years))).days % 365


def days_in_current_year() -> int:
    return 366 if calendar.isleap(datetime.now(tz.tzlocal()).year) else 365


def days_since_start_of_current_year() -> int:
    """Full days elapsed since January 1st, local time (0 on January 1st)."""
    now = datetime.now(tz.tzlocal())
    return (now - start_of(now, "year")).days


# ============================================================================
# TIMEZONES
# ============================================================================

def guess_user_timezone() -> str:
    """
    Best guess of the local IANA timezone name ('Europe/Paris').

    Reads the TZ environment variable, then the /etc/localtime link, and
    falls back to the abbreviation of the local offset ('CET', 'UTC').
    """
    tz_name = os.environ.get("TZ", "").lstrip(":")
    if tz_name and tz.gettz(tz_name) is not None:
        return tz_name

    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = str(localtime.resolve())
        if "zoneinfo/" in target:
            return target.split("zoneinfo/", 1)[1]

    return datetime.now(tz.tzlocal()).tzname() or "UTC"


@fallback_on_invalid(default="")
def change_timezone(date_value, timezone_name: str, have_same_time: bool = False) -> str:
    """
    Express a date in another timezone.

    Args:
        date_value: Date to convert
        timezone_name: IANA timezone name (e.g. 'America/New_York')
        have_same_time: Keep the wall-clock time and only change the zone (default: False)

    Returns:
        ISO-8601 string, or '' on invalid input

    Examples:
        >>> change_timezone("2024-01-15T10:30:00Z", "Europe/Paris")
        '2024-01-15T11:30:00+01:00'
        >>> change_timezone("2024-01-15T10:30:00Z", "Europe/Paris", True)
        '2024-01-15T10:30:00+01:00'
    """
    moment = require_datetime(date_value)
    target = tz.gettz(timezone_name) if isinstance(timezone_name, str) and timezone_name.strip() else None
    if target is None:
        raise InvalidParameterError(f"unknown timezone {timezone_name!r}", detail={"timezone": repr(timezone_name)})

    if have_same_time:
        return _format(moment.replace(tzinfo=target))
    return _format(moment.astimezone(target))


def current_utc_time() -> str:
    """Current UTC time, e.g. '2024-01-15T10:30:00Z'."""
    return _format(datetime.now(timezone.utc))


@fallback_on_invalid(default=False)
def is_date_utc(date_value) -> bool:
    """
    True if the date carries a zero UTC offset. Naive datetimes are local time, so False.

    Examples:
        >>> is_date_utc("2024-01-15T10:30:00Z")
        True
        >>> is_date_utc("2024-01-15T10:30:00+02:00")
        False
    """
    parsed = _parse_raw(date_value)
    if parsed is None:
        raise InvalidInputError("invalid date", detail={"date": repr(date_value)})
    return parsed.tzinfo is not None and parsed.utcoffset() == timedelta(0)


@fallback_on_invalid(default="")
def convert_date_to_utc(date_value) -> str:
    """
    Examples:
        >>> convert_date_to_utc("2024-01-15T11:30:00+01:00")
        '2024-01-15T10:30:00Z'
    """
    return _format(require_datetime(date_value).astimezone(timezone.utc))


@fallback_on_invalid(default="")
def convert_date_to_local_time(date_value) -> str:
    return _format(_local(require_datetime(date_value)))
