"""
UtilityBelt: exact decimal arithmetic, number and currency formatting, and small helpers.

Every public function is re-exported here:

    from utilitybelt import format_number, label_currency, number_to_atomic_unit
"""
from utilitybelt.logging_config import configure_logging
from utilitybelt.schemas.atomic_unit import AtomicUnit
from utilitybelt.utils.atomic_unit_utils import atomic_unit_to_decimal, number_to_atomic_unit
from utilitybelt.utils.cookie_utils import parse_value_from_cookie
from utilitybelt.utils.crypto_utils import shift_down, shift_up
from utilitybelt.utils.currency_utils import (
    currency_exists,
    format_currency_amount,
    get_currency_full_name,
    get_currency_symbol,
    label_currency,
    )
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
    )
from utilitybelt.utils.delay_utils import delay
from utilitybelt.utils.email_utils import is_email_valid
from utilitybelt.utils.number_utils import (
    absolute_to_decimal,
    count_decimal_places,
    format_number,
    is_number,
    label_number,
    round_number,
    round_number_down,
    round_number_up,
    string_to_decimal,
    truncate_number,
    )
from utilitybelt.utils.object_utils import count_value_in_objects, is_object_empty
from utilitybelt.utils.string_utils import (
    capitalize_first_letter_only,
    is_string_contains_number,
    normalize_string,
    number_to_string,
    remove_non_numeric_characters,
    remove_numbers_from_string,
    replace_last_comma_by_dot,
    slugify_string,
    )
from utilitybelt.utils.uuid_utils import generate_crypto_random_uuid, generate_uuid
from utilitybelt.utils.validation_utils import (
    InconsistencyError,
    InvalidInputError,
    InvalidParameterError,
    UtilityBeltError,
    )

__version__ = "0.1.0"

__all__ = [
    "AtomicUnit",
    "InconsistencyError",
    "InvalidInputError",
    "InvalidParameterError",
    "UtilityBeltError",
    "absolute_to_decimal",
    "atomic_unit_to_decimal",
    "capitalize_first_letter_only",
    "change_timezone",
    "configure_logging",
    "convert_date_to_local_time",
    "convert_date_to_utc",
    "count_decimal_places",
    "count_value_in_objects",
    "currency_exists",
    "current_utc_time",
    "days_in_current_year",
    "days_since_start_of_current_year",
    "delay",
    "format_currency_amount",
    "format_number",
    "generate_crypto_random_uuid",
    "generate_uuid",
    "get_currency_full_name",
    "get_currency_symbol",
    "get_string_difference_from_datetime",
    "get_string_difference_from_now",
    "get_string_difference_to_datetime",
    "get_string_difference_to_now",
    "guess_user_timezone",
    "how_many_leap_day_in_last_years",
    "is_date_between",
    "is_date_leap_year",
    "is_date_same",
    "is_date_same_or_after",
    "is_date_same_or_before",
    "is_date_today",
    "is_date_tomorrow",
    "is_date_utc",
    "is_date_yesterday",
    "is_email_valid",
    "is_number",
    "is_object_empty",
    "is_string_contains_number",
    "label_currency",
    "label_number",
    "normalize_string",
    "number_to_atomic_unit",
    "number_to_string",
    "parse_value_from_cookie",
    "remove_non_numeric_characters",
    "remove_numbers_from_string",
    "replace_last_comma_by_dot",
    "round_number",
    "round_number_down",
    "round_number_up",
    "shift_down",
    "shift_up",
    "slugify_string",
    "string_to_decimal",
    "truncate_number",
    ]
