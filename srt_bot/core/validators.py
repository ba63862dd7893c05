"""Field validators for passenger request input.

Each validator is a pure function over the raw string. It returns
``Success(normalized_value)`` when the input is acceptable and
``Failure(reason, ValidationError)`` otherwise, so callers can show the
reason and re-prompt.
"""

import re
from datetime import datetime

from .exceptions import ValidationError
from .result import Failure, Result, Success

PHONE_PATTERN = re.compile(r"010[0-9]{8}")
TIME_PATTERN = re.compile(r"([0-9]{2}):?([0-9]{2})")
DATE_PATTERN = re.compile(r"[0-9]{8}")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
GUEST_PASSWORD_PATTERN = re.compile(r"[0-9]{5}")

ValidationResult = Result[str, ValidationError]


def _reject(field: str, reason: str) -> Failure[ValidationError]:
    return Failure(reason, ValidationError(field, reason))


def validate_required(value: str, field: str) -> ValidationResult:
    """Reject blank input."""
    stripped = value.strip()
    if not stripped:
        return _reject(field, f"{field} is required")
    return Success(stripped)


def validate_phone(value: str) -> ValidationResult:
    """Accept exactly ``010`` followed by 8 digits (e.g. 01012345678)."""
    if not PHONE_PATTERN.fullmatch(value):
        return _reject(
            "phone", "Phone number must be 11 digits starting with 010 (e.g. 01012345678)"
        )
    return Success(value)


def validate_time(value: str) -> ValidationResult:
    """
    Accept a time of day as ``HHMM`` or ``HH:MM``.

    Returns:
        Success with the time normalized to ``HH:MM``
    """
    match = TIME_PATTERN.fullmatch(value)
    if not match:
        return _reject("time", "Time must be 4 digits as HH:MM or HHMM (e.g. 10:37)")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23:
        return _reject("time", f"Hour must be between 00 and 23, got {hour:02d}")
    if minute > 59:
        return _reject("time", f"Minute must be between 00 and 59, got {minute:02d}")
    return Success(f"{hour:02d}:{minute:02d}")


def validate_date(value: str) -> ValidationResult:
    """Accept ``YYYYMMDD`` only when it names a real calendar date."""
    if not DATE_PATTERN.fullmatch(value):
        return _reject("date", "Date must be 8 digits as YYYYMMDD (e.g. 20250622)")
    try:
        datetime.strptime(value, "%Y%m%d")
    except ValueError:
        return _reject("date", f"{value} is not a valid calendar date")
    return Success(value)


def validate_email(value: str) -> ValidationResult:
    """Accept a local@domain.tld address, or an empty string (field is optional)."""
    if value == "":
        return Success(value)
    if not EMAIL_PATTERN.fullmatch(value):
        return _reject("email", "Invalid email address (e.g. example@gmail.com)")
    return Success(value)


def validate_guest_password(value: str) -> ValidationResult:
    """Accept exactly 5 numeric digits."""
    if len(value) != 5:
        return _reject("password", "Password must be exactly 5 digits")
    if not GUEST_PASSWORD_PATTERN.fullmatch(value):
        return _reject("password", "Password must contain digits only")
    return Success(value)
