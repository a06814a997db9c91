"""Coercion of raw form values into numbers with user-facing error messages."""

import math

from protean.exceptions import ValidationError


def parse_int(value, field, message, minimum=None):
    """Parse an integer, rejecting fractions, junk and values below ``minimum``."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError({field: [message]}) from None
    if minimum is not None and number < minimum:
        raise ValidationError({field: [message]})
    return number


def parse_float(value, field, message, minimum=None):
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError({field: [message]}) from None
    if not math.isfinite(number):
        raise ValidationError({field: [message]})
    if minimum is not None and number < minimum:
        raise ValidationError({field: [message]})
    return number


def is_blank(*values) -> bool:
    """True when any value is missing or an empty string."""
    return any(value is None or (isinstance(value, str) and not value.strip()) for value in values)
