"""
Validation of user create/update payloads
"""

import re
from typing import Optional, Tuple

from userapi.utils.exceptions import ValidationError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

# local@domain.tld with no whitespace and exactly one "@"
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MISSING_FIELD_MESSAGE = "Name and email are required"
NAME_LENGTH_MESSAGE = f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
INVALID_EMAIL_MESSAGE = "Invalid email format"


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_user_request(name: Optional[str], email: Optional[str]) -> Tuple[str, str]:
    """
    Check a candidate name and email

    Args:
        name: Raw name as supplied by the client, possibly absent
        email: Raw email as supplied by the client, possibly absent

    Returns:
        The name and email exactly as supplied

    Raises:
        ValidationError: if a field is missing, the trimmed name is out of
            bounds, or the email is malformed
    """
    if not name or not email:
        raise ValidationError(MISSING_FIELD_MESSAGE)

    if not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        raise ValidationError(NAME_LENGTH_MESSAGE)

    if not is_valid_email(email):
        raise ValidationError(INVALID_EMAIL_MESSAGE)

    return name, email
