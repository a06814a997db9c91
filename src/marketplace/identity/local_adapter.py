"""Identity provider backed by the marketplace's own document store.

Used in development, in tests, and for deployments that do not delegate
accounts to Firebase. Passwords are hashed with argon2id.
"""

from datetime import UTC, datetime

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.identity.account import Account
from marketplace.identity.port import IdentityAccount, IdentityProvider
from marketplace.shared.errors import AuthenticationError

MIN_PASSWORD_LENGTH = 6


class LocalIdentityProvider(IdentityProvider):
    def __init__(self) -> None:
        self._hasher = PasswordHasher()

    def _find(self, email: str) -> Account | None:
        repo = current_domain.repository_for(Account)
        matches = repo._dao.query.filter(email=email.lower()).all().items
        return matches[0] if matches else None

    def create_account(self, email: str, password: str) -> IdentityAccount:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password minimal {MIN_PASSWORD_LENGTH} karakter"]})
        if self._find(email) is not None:
            raise ValidationError({"email": ["Email sudah terdaftar"]})

        account = Account(
            email=email.lower(),
            password_hash=self._hasher.hash(password),
            created_at=datetime.now(UTC),
        )
        current_domain.repository_for(Account).add(account)
        return IdentityAccount(id=str(account.id), email=account.email)

    def get_account_by_email(self, email: str) -> IdentityAccount | None:
        account = self._find(email)
        if account is None:
            return None
        return IdentityAccount(id=str(account.id), email=account.email)

    def get_account_by_id(self, account_id: str) -> IdentityAccount | None:
        try:
            account = current_domain.repository_for(Account).get(account_id)
        except ObjectNotFoundError:
            return None
        return IdentityAccount(id=str(account.id), email=account.email)

    def authenticate(self, email: str, password: str) -> IdentityAccount:
        account = self._find(email)
        if account is None:
            raise AuthenticationError("Email atau password salah")
        try:
            self._hasher.verify(account.password_hash, password)
        except (VerificationError, InvalidHash):
            raise AuthenticationError("Email atau password salah") from None
        return IdentityAccount(id=str(account.id), email=account.email)
