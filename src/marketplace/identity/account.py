"""Account aggregate backing the local identity provider."""

from protean.fields import DateTime, String

from marketplace.domain import marketplace


@marketplace.aggregate
class Account:
    """Credentials for one login. Only the argon2 hash of the password is kept."""

    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    created_at = DateTime()
