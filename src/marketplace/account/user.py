"""User aggregate: the marketplace profile behind an identity-provider account."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String, Text, ValueObject

from marketplace.account.events import UserRegistered
from marketplace.domain import marketplace
from marketplace.shared.email import EmailAddress
from marketplace.shared.phone import PhoneNumber


class UserRole(Enum):
    USER = "user"
    OWNER = "owner"


@marketplace.aggregate
class User:
    """A registered buyer or seller.

    The identifier is the one issued by the identity provider, so a verified
    token subject maps straight onto a profile. ``owner`` is the platform
    operator role; it is never granted over HTTP.
    """

    email = ValueObject(EmailAddress, required=True)
    name = String(required=True, max_length=100)
    address = Text(required=True)
    phone_number = ValueObject(PhoneNumber, required=True)
    role = String(choices=UserRole, default=UserRole.USER.value)
    created_at = DateTime()

    @classmethod
    def register(cls, user_id, email, name, address, phone_number):
        now = datetime.now(UTC)
        user = cls(
            id=user_id,
            email=EmailAddress(address=email),
            name=name,
            address=address,
            phone_number=PhoneNumber(number=phone_number),
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=email,
                name=name,
                registered_at=now,
            )
        )
        return user

    @property
    def is_platform_owner(self) -> bool:
        return self.role == UserRole.OWNER.value

    def grant_owner_role(self):
        """Promote to platform owner. Administrative, see ``manage.py grant-owner``."""
        self.role = UserRole.OWNER.value
