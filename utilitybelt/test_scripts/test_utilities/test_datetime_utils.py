"""
Test datetime utilities.
All test is independent of the others, so help use pytest features.
"""
import calendar
from datetime import date, datetime, timedelta, timezone

import pytest
from structlog.testing import capture_logs

from utilitybelt.utils.datetime_utils import (
    change_timezone,
    convert_date_to_local_time,
    convert_date_to_utc,
    current_utc_time,
    days_in_current_year,
    days_since_start_of_current_year,
    get_string_difference_from_datetime,
    get_string_difference_from_now,
    get_string_difference_to_datetime,
    get_string_difference_to_now,
    guess_user_timezone,
    how_many_leap_day_in_last_years,
    is_date_between,
    is_date_leap_year,
    is_date_same,
    is_date_same_or_after,
    is_date_same_or_before,
    is_date_today,
    is_date_tomorrow,
    is_date_utc,
    is_date_yesterday,
    parse_datetime,
    start_of,
    )


# ============================================================================
# TESTS: parsing
# ============================================================================

def test_parse_datetime_inputs():
    assert parse_datetime("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert parse_datetime(date(2024, 1, 15)).date() == date(2024, 1, 15)
    assert parse_datetime(datetime(2024, 1, 15, 10, 30)).tzinfo is not None


@pytest.mark.parametrize("value", [None, "", "not a date", True, float("nan"), [], "2024-13-45"])
def test_parse_datetime_invalid(value):
    assert parse_datetime(value) is None


def test_start_of():
    moment = datetime(2024, 5, 17, 13, 45, 12, 345678)
    assert start_of(moment, "year") == datetime(2024, 1, 1)
    assert start_of(moment, "month") == datetime(2024, 5, 1)
    assert start_of(moment, "day") == datetime(2024, 5, 17)
    assert start_of(moment, "hour") == datetime(2024, 5, 17, 13)
    assert start_of(moment, "minute") == datetime(2024, 5, 17, 13, 45)
    assert start_of(moment, "second") == datetime(2024, 5, 17, 13, 45, 12)
    assert start_of(moment, "millisecond") == datetime(2024, 5, 17, 13, 45, 12, 345000)


# ============================================================================
# TESTS: relative descriptions
# ============================================================================

class TestRelativeDescriptions:

    def test_from_now(self):
        assert get_string_difference_from_now(datetime.now() - timedelta(days=3)) == "3 days ago"
        assert get_string_difference_from_now(datetime.now() + timedelta(days=3)) == "in 3 days"

    def test_from_now_french(self):
        assert get_string_difference_from_now(datetime.now() + timedelta(hours=2), "fr") == "dans 2 heures"

    def test_without_suffix(self):
        assert get_string_difference_from_now(datetime.now() - timedelta(days=3), "en", True) == "3 days"

    def test_to_now(self):
        assert get_string_difference_to_now(datetime.now() - timedelta(days=3)) == "in 3 days"

    def test_from_and_to_datetime(self):
        assert get_string_difference_from_datetime("2024-01-01", "2024-01-04") == "in 3 days"
        assert get_string_difference_to_datetime("2024-01-01", "2024-01-04") == "3 days ago"

    def test_invalid(self):
        with capture_logs() as cap_logs:
            assert get_string_difference_from_now(None) == ""
            assert get_string_difference_to_datetime("2024-01-01", "garbage") == ""

        assert [log["log_level"] for log in cap_logs] == ["error", "error"]


# ============================================================================
# TESTS: comparisons
# ============================================================================

class TestIsDateBetween:

    def test_exclusive_by_default(self):
        assert is_date_between("2024-01-15", "2024-01-01", "2024-01-31")
        assert not is_date_between("2024-01-01", "2024-01-01", "2024-01-31")

    def test_inclusive_checks(self):
        assert is_date_between("2024-01-01", "2024-01-01", "2024-01-31", inclusive_check="[)")
        assert not is_date_between("2024-01-31", "2024-01-01", "2024-01-31", inclusive_check="[)")
        assert is_date_between("2024-01-31", "2024-01-01", "2024-01-31", inclusive_check="(]")
        assert is_date_between("2024-01-31", "2024-01-01", "2024-01-31", inclusive_check="[]")

    def test_granularity(self):
        """Same day at a different hour is not strictly between days, but is between hours."""
        assert not is_date_between("2024-01-01T12:00:00", "2024-01-01T08:00:00", "2024-01-02T00:00:00")
        assert is_date_between("2024-01-01T12:00:00", "2024-01-01T08:00:00", "2024-01-02T00:00:00", "hour")

    def test_reversed_bounds(self):
        assert is_date_between("2024-01-15", "2024-01-31", "2024-01-01")

    def test_invalid(self):
        assert not is_date_between("garbage", "2024-01-01", "2024-01-31")
        assert not is_date_between("2024-01-15", "2024-01-01", "2024-01-31", "week")
        assert not is_date_between("2024-01-15", "2024-01-01", "2024-01-31", inclusive_check="{}")


def test_is_date_same():
    assert is_date_same("2024-01-15T08:00:00", "2024-01-15T20:00:00")
    assert not is_date_same("2024-01-15T08:00:00", "2024-01-15T20:00:00", "hour")
    assert is_date_same("2024-01-15", "2024-01-31", "month")
    assert not is_date_same("2024-01-15", None)


def test_is_date_same_or_before_and_after():
    assert is_date_same_or_before("2024-01-15T23:00:00", "2024-01-15T01:00:00")
    assert not is_date_same_or_before("2024-01-15T23:00:00", "2024-01-15T01:00:00", "hour")
    assert is_date_same_or_after("2024-01-16", "2024-01-15")
    assert not is_date_same_or_after("2024-01-14", "2024-01-15")
    assert not is_date_same_or_after("2024-01-16", "2024-01-15", "fortnight")


def test_yesterday_today_tomorrow():
    now = datetime.now()
    assert is_date_today(now)
    assert is_date_yesterday(now - timedelta(days=1))
    assert is_date_tomorrow(now + timedelta(days=1))
    assert not is_date_today(now + timedelta(days=1))
    assert not is_date_today("garbage")


def test_is_date_leap_year():
    assert is_date_leap_year("2024-06-01")
    assert not is_date_leap_year("2023-06-01")
    assert not is_date_leap_year("2100-06-01")
    assert is_date_leap_year("2000-06-01")


# ============================================================================
# TESTS: calendar counts
# ============================================================================

def test_how_many_leap_day_in_last_years():
    """Any four consecutive years hold exactly one February 29th (until 2100)."""
    assert how_many_leap_day_in_last_years(4) == 1
    assert how_many_leap_day_in_last_years(8) == 2
    assert how_many_leap_day_in_last_years(4, False) == 1


@pytest.mark.parametrize("years", [0, -1, "4", None, 2.5])
def test_how_many_leap_day_in_last_years_invalid(years):
    assert how_many_leap_day_in_last_years(years) == 0


def test_days_in_current_year():
    expected = 366 if calendar.isleap(date.today().year) else 365
    assert days_in_current_year() == expected


def test_days_since_start_of_current_year():
    today = date.today()
    assert days_since_start_of_current_year() == (today - date(today.year, 1, 1)).days


# ============================================================================
# TESTS: timezones
# ============================================================================

def test_guess_user_timezone():
    result = guess_user_timezone()
    assert isinstance(result, str)
    assert result


def test_change_timezone():
    assert change_timezone("2024-01-15T10:30:00Z", "Europe/Paris") == "2024-01-15T11:30:00+01:00"
    assert change_timezone("2024-01-15T10:30:00Z", "Europe/Paris", True) == "2024-01-15T10:30:00+01:00"
    assert change_timezone("2024-07-15T10:30:00Z", "America/New_York") == "2024-07-15T06:30:00-04:00"


def test_change_timezone_invalid():
    assert change_timezone("2024-01-15T10:30:00Z", "Mars/Olympus_Mons") == ""
    assert change_timezone("garbage", "Europe/Paris") == ""


def test_current_utc_time():
    result = current_utc_time()
    assert result.endswith("Z")
    parsed = datetime.fromisoformat(result.replace("Z", "+00:00"))
    assert abs(datetime.now(timezone.utc) - parsed) < timedelta(minutes=1)


def test_is_date_utc():
    assert is_date_utc("2024-01-15T10:30:00Z")
    assert is_date_utc(datetime(2024, 1, 15, tzinfo=timezone.utc))
    assert not is_date_utc("2024-01-15T10:30:00+02:00")
    assert not is_date_utc(datetime(2024, 1, 15))
    assert not is_date_utc("garbage")


def test_convert_date_to_utc():
    assert convert_date_to_utc("2024-01-15T11:30:00+01:00") == "2024-01-15T10:30:00Z"
    assert convert_date_to_utc(None) == ""


def test_convert_date_to_local_time():
    result = convert_date_to_local_time("2024-01-15T10:30:00Z")
    assert parse_datetime(result) == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert convert_date_to_local_time("garbage") == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
