"""PhoneNumber value object for validated phone numbers."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from marketplace.domain import marketplace


@marketplace.value_object
class PhoneNumber:
    """Value object for phone numbers.

    Accepts digits, spaces, hyphens, parentheses, and an optional leading +.
    """

    number = String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        number = self.number

        if not re.search(r"\d", number) or not re.match(r"^\+?[\d\s\-()]+$", number):
            raise ValidationError({"phone_number": [f"Nomor telepon tidak valid: {number!r}"]})
