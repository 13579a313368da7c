"""
Email utilities.

Permissive email format check: account-part@domain where the account part is
at most 64 characters, the domain at most 255 and each domain label at most 63.

Thanks to:
    http://fightingforalostcause.net/misc/2006/compare-email-regex.php
    https://en.wikipedia.org/wiki/Email_address
"""
import re

EMAIL_REGEX = re.compile(
    r"^[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~](\.?[-!#$%&'*+/0-9=?A-Z^_a-z`{|}~])*"
    r"@[a-zA-Z0-9](-*\.?[a-zA-Z0-9])*\.[a-zA-Z](-?[a-zA-Z0-9])+$"
    )

MAX_ACCOUNT_LENGTH = 64
MAX_DOMAIN_LENGTH = 255
MAX_DOMAIN_LABEL_LENGTH = 63


def is_email_valid(email) -> bool:
    """
    Examples:
        >>> is_email_valid("jane.doe@example.com")
        True
        >>> is_email_valid("jane..doe@example.com")
        False
    """
    if not isinstance(email, str) or not email.strip():
        return False

    account, _, domain = email.partition("@")
    domain = domain.split("@")[0]
    if not account or not domain:
        return False

    if len(account) > MAX_ACCOUNT_LENGTH or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    if any(len(label) > MAX_DOMAIN_LABEL_LENGTH for label in domain.split(".")):
        return False

    return EMAIL_REGEX.match(email) is not None
