"""
utils/validation_utils.py

Purpose: Input validation

- Account email format
- Contact name / email / phone formats
- ObjectId parsing for path parameters
"""

import re
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

# Patterns are searched, not fully matched, except where anchored.
USER_EMAIL_PATTERN = re.compile(r"[a-z0-9]+@[a-z]+\.[a-z]{2,3}")

CONTACT_NAME_PATTERN = re.compile(
    r"(^[A-Z][a-z]{1,14} [A-Z][a-z]{1,14}$)|(^[А-Я][а-я]{1,14} [А-Я][а-я]{1,14}$)"
)
CONTACT_EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9-]+.+.[A-Z]{2,4}", re.IGNORECASE)
CONTACT_PHONE_PATTERN = re.compile(
    r"^((\+?3)?8)?((0\(\d{2}\)?)|(\(0\d{2}\))|(0\d{2}))\d{7}$"
)

MIN_PASSWORD_LENGTH = 6


def validate_user_email(email: str) -> bool:
    """
    Validates an account email.

    Example: user@mail.com
    """
    if not email:
        return False
    return USER_EMAIL_PATTERN.search(email) is not None


def validate_contact_name(name: str) -> bool:
    """
    Validates a contact name: two capitalized words, Latin or Cyrillic.

    Examples: "John Doe", "Иван Петров"
    """
    if not name:
        return False
    return CONTACT_NAME_PATTERN.match(name) is not None


def validate_contact_email(email: str) -> bool:
    if not email:
        return False
    return CONTACT_EMAIL_PATTERN.search(email) is not None


def validate_contact_phone(phone: str) -> bool:
    """
    Validates a Ukrainian-style phone number.

    Accepted forms:
    - 0501234567
    - 80501234567
    - +380501234567
    - (050)1234567
    """
    if not phone:
        return False
    return CONTACT_PHONE_PATTERN.match(phone) is not None


def parse_object_id(value: str) -> Optional[ObjectId]:
    """
    Parses a path parameter into an ObjectId.

    Returns:
        ObjectId, or None if the value is not a valid id
    """
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None
