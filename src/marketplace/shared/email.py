"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from marketplace.domain import marketplace


def _invalid(email):
    return ValidationError({"email": [f"Email tidak valid: {email!r}"]})


@marketplace.value_object
class EmailAddress:
    """A structurally valid email address.

    Exactly one @, non-empty local and domain parts, a dotted domain, no
    whitespace and no consecutive dots.
    """

    address = String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise _invalid(email)

        if "." not in domain_part or ".." in local_part or ".." in domain_part:
            raise _invalid(email)

        for forbidden in (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\"):
            if forbidden in email:
                raise _invalid(email)
