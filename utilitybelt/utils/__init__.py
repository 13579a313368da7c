"""
Utility functions for UtilityBelt.

This package contains:
- validation_utils: Error taxonomy, decimal parsing, guards and the fallback decorator
- number_utils: Truncation, rounding, formatting and magnitude labels
- atomic_unit_utils: Decimal <-> integer atomic unit conversion
- crypto_utils: Smallest unit <-> display unit shifting
- currency_utils: Currency names, symbols and amount formatting
- string_utils, datetime_utils, cookie_utils, email_utils, object_utils, uuid_utils, delay_utils: Small helpers
"""
