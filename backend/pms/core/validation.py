"""
Common validation utilities for the prescription domain.

Entities call these from __post_init__ and the API layer uses them to coerce
raw JSON values (UUID strings, ISO dates) before they reach the services.
Every failure is a ValidationError carrying the offending field.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pms.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
TEXT_MAX_LENGTH = 100
DOSAGE_MAX_LENGTH = 255
PERSON_NAME_MIN_LENGTH = 4
# Largest value the 32-bit quantity column holds
QUANTITY_MAX = 2**31 - 1
PESEL_LENGTH = 11
PESEL_WEIGHTS = (1, 3, 7, 9, 1, 3, 7, 9, 1, 3)
PWZ_LENGTH = 7


def validate_required_text(value: Any, field_name: str, max_length: int) -> str:
    """Validate that a text field is present, non-blank and not too long.

    Returns the stripped value.
    """
    if value is None or not isinstance(value, str):
        raise ValidationError(field_name, "must be a string")

    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(field_name, "must not be empty")
    if len(cleaned) > max_length:
        raise ValidationError(
            field_name, f"must be at most {max_length} characters long"
        )
    return cleaned


def validate_name(value: Any, field_name: str = "name") -> str:
    return validate_required_text(value, field_name, NAME_MAX_LENGTH)


def validate_person_name(value: Any, field_name: str = "name") -> str:
    """Validate a person's name in "Firstname Lastname" form.

    At least two space-separated words; every part (also either side of a
    hyphen) starts upper case and continues lower case, so "Karl Heinz-Müller"
    passes and "John doe", "JOhn Doe" or "John-Doe" do not.
    """
    cleaned = validate_required_text(value, field_name, NAME_MAX_LENGTH)
    if len(cleaned) < PERSON_NAME_MIN_LENGTH:
        raise ValidationError(
            field_name, f"must be at least {PERSON_NAME_MIN_LENGTH} characters long"
        )
    if len(cleaned.split(" ")) < 2:
        raise ValidationError(field_name, "must be in format: Firstname Lastname")

    for part in cleaned.replace("-", " ").split(" "):
        rest = part[1:]
        if not part or not part[0].isupper() or (rest and not rest.islower()):
            raise ValidationError(field_name, "must be in format: Firstname Lastname")
    return cleaned


def _is_ascii_digits(value: str, length: int) -> bool:
    return len(value) == length and value.isascii() and value.isdigit()


def _pesel_birth_date(digits: str) -> Optional[date]:
    # The month carries the century: +80 for 1800s, +0 for 1900s, +20 for 2000s...
    year, month, day = int(digits[0:2]), int(digits[2:4]), int(digits[4:6])
    centuries = {80: 1800, 0: 1900, 20: 2000, 40: 2100, 60: 2200}
    offset = (month // 20) * 20
    if offset not in centuries:
        return None
    try:
        return date(centuries[offset] + year, month - offset, day)
    except ValueError:
        return None


def validate_pesel(value: Any, field_name: str = "pesel_number") -> str:
    """Validate a PESEL number: 11 digits, a real birth date, a checksum.

    The checksum is the weighted digit sum of the first ten digits modulo 10
    and must equal the last digit.
    """
    if not isinstance(value, str):
        raise ValidationError(field_name, "must be a string")
    cleaned = value.strip()
    if not _is_ascii_digits(cleaned, PESEL_LENGTH):
        raise ValidationError(
            field_name, f"must be {PESEL_LENGTH} characters long and contain only digits"
        )
    if _pesel_birth_date(cleaned) is None:
        raise ValidationError(field_name, "the date part is incorrect")

    checksum = sum(int(d) * w for d, w in zip(cleaned[:10], PESEL_WEIGHTS)) % 10
    if checksum != int(cleaned[10]):
        raise ValidationError(field_name, "the checksum is incorrect")
    return cleaned


def validate_pwz(value: Any, field_name: str = "pwz_number") -> str:
    """Validate a PWZ (medical licence) number.

    Seven digits; the first is the control digit and equals the sum of the
    remaining six, each multiplied by its position (1..6), modulo 11.
    """
    if not isinstance(value, str):
        raise ValidationError(field_name, "must be a string")
    cleaned = value.strip()
    if not _is_ascii_digits(cleaned, PWZ_LENGTH):
        raise ValidationError(
            field_name, f"must be {PWZ_LENGTH} characters long and contain only digits"
        )

    checksum = sum(int(d) * i for i, d in enumerate(cleaned[1:], start=1)) % 11
    if checksum != int(cleaned[0]):
        raise ValidationError(field_name, "the checksum is incorrect")
    return cleaned


def validate_positive_int(
    value: Any, field_name: str, max_value: int = QUANTITY_MAX
) -> int:
    """Validate a strictly positive integer no greater than max_value.

    Booleans are not integers here.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field_name, "must be an integer")
    if value <= 0:
        raise ValidationError(field_name, "must be a positive integer")
    if value > max_value:
        raise ValidationError(field_name, f"must be at most {max_value}")
    return value


def validate_uuid(value: Any, field_name: str) -> UUID:
    """Coerce a UUID or its string form into a UUID."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str):
        raise ValidationError(field_name, "must be a valid UUID")
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(field_name, "must be a valid UUID") from None


def validate_past_date(
    value: Any, field_name: str, today: Optional[date] = None
) -> date:
    """Validate a calendar date that is not in the future.

    Accepts a date or an ISO-8601 string (YYYY-MM-DD).
    """
    if isinstance(value, datetime):
        value = value.date()
    elif isinstance(value, str):
        try:
            value = date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(field_name, "must be an ISO date (YYYY-MM-DD)") from None
    elif not isinstance(value, date):
        raise ValidationError(field_name, "must be a date")

    reference = today or date.today()
    if value > reference:
        logger.debug(
            "Rejected future date",
            extra={"context": {"field": field_name, "value": value.isoformat()}},
        )
        raise ValidationError(field_name, "must not be in the future")
    return value


def coerce_uuid(value: Any) -> Optional[UUID]:
    """Return the UUID form of value, or None when it cannot be one.

    Used for lookups: an identifier that is not a UUID cannot name a stored
    entity, so it is treated as absent rather than malformed.
    """
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            return None
    return None
