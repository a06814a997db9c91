"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A person signed up and received a marketplace profile."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String(required=True)
    registered_at = DateTime(required=True)
