"""Identity provider port (abstract interface).

Accounts and credentials live with the identity provider; the marketplace
only keeps the profile (``User``) keyed by the account id. Adapters:
LocalIdentityProvider (document store, default) and FirebaseIdentityProvider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityAccount:
    """An account as known to the identity provider."""

    id: str
    email: str


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def create_account(self, email: str, password: str) -> IdentityAccount:
        """Create an account, raising ValidationError if the email is taken."""
        ...

    @abstractmethod
    def get_account_by_email(self, email: str) -> IdentityAccount | None:
        ...

    @abstractmethod
    def get_account_by_id(self, account_id: str) -> IdentityAccount | None:
        ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> IdentityAccount:
        """Verify credentials, raising AuthenticationError when they do not match."""
        ...
