"""
Parameter validation helpers

All checks raise ValidationError naming the offending field, before any
request is sent.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from .exceptions import ValidationError

CONTACT_STATUSES = ("SUBSCRIBED", "INVITED", "CONFIRMED", "CANCELLED")
SHORTLINK_STATUSES = ("ACTIVE", "INACTIVE")
MESSAGE_DIRECTIONS = ("MT", "MO")

_MSISDN_SEPARATORS = re.compile(r"[\s\-().+]")


def require(value: Any, field: str) -> Any:
    """Fail if value is None, an empty string or an empty collection"""
    if value is None:
        raise ValidationError(f"{field} is required", field=field)
    if isinstance(value, str) and not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    if isinstance(value, (list, tuple, dict)) and not value:
        raise ValidationError(f"{field} is required", field=field)
    return value


def validate_contact_status(status: Optional[str], field: str = "status") -> Optional[str]:
    if status is None:
        return None
    if status not in CONTACT_STATUSES:
        raise ValidationError(
            f"Invalid status: {status}. Valid statuses are: {', '.join(CONTACT_STATUSES)}",
            field=field,
        )
    return status


def validate_integer(value: Any, field: str, is_boolean: bool = False) -> Optional[int]:
    """
    Check that value is integral (ints or numeric strings such as "10")

    With is_boolean, the value must also be 0 or 1.
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise ValidationError(f"{field}: value {value} is not numeric", field=field)

    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and re.fullmatch(r"\s*-?\d+\s*", value):
        number = int(value)
    else:
        raise ValidationError(f"{field}: value {value!r} is not numeric", field=field)

    if is_boolean and number not in (0, 1):
        raise ValidationError(f"{field}: value {value} is not 0 or 1", field=field)

    return number


def validate_date(value: Any, field: str, required: bool = False) -> Optional[str]:
    """
    Normalize a date to the API's "YYYY-MM-DD HH:MM:SS" format

    Accepts datetime/date objects and ISO 8601 strings ("2024-01-01",
    "2024-01-01 08:30:00", "2024-01-01T08:30:00"). Values carrying a UTC
    offset are converted to UTC; naive values are sent as given.
    """
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field}: invalid date: {value}", field=field)
    else:
        raise ValidationError(f"{field}: invalid date format: {value!r}", field=field)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def validate_list(value: Any, field: str, required: bool = False) -> Optional[list]:
    if value is None:
        if required:
            raise ValidationError(f"{field} is required", field=field)
        return None

    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field}: expected a list, got {type(value).__name__}", field=field)
    if required and not value:
        raise ValidationError(f"{field} must not be empty", field=field)

    return list(value)


def validate_choice(value: Optional[str], choices, field: str) -> Optional[str]:
    if value is None:
        return None
    if value not in choices:
        raise ValidationError(
            f"Invalid {field}: {value}. Valid values are: {', '.join(choices)}", field=field
        )
    return value


def validate_shortlink_status(status: Any, field: str = "status") -> str:
    """Normalize and check a shortlink status (ACTIVE or INACTIVE)"""
    if isinstance(status, str):
        status = status.strip().upper()
    if status not in SHORTLINK_STATUSES:
        raise ValidationError(f"{field} must be ACTIVE or INACTIVE", field=field)
    return status


def build_msisdn(country_code: Any, phone_number: Any) -> str:
    """
    Join a country code and a local number into a subscriber id

    >>> build_msisdn("502", "1234-5678")
    '50212345678'
    """
    require(country_code, "country_code")
    require(phone_number, "phone_number")

    code = _MSISDN_SEPARATORS.sub("", str(country_code))
    number = _MSISDN_SEPARATORS.sub("", str(phone_number))

    if not code.isdigit():
        raise ValidationError(f"Invalid country code: {country_code}", field="country_code")
    if not number.isdigit():
        raise ValidationError(f"Invalid phone number: {phone_number}", field="phone_number")

    return code + number
