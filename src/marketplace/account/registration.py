"""Registration, login and profile lookup."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.catalog.accessor import CatalogAccessor
from marketplace.domain import marketplace
from marketplace.identity import get_identity_provider
from marketplace.identity.tokens import issue_token, read_token
from marketplace.shared.email import EmailAddress
from marketplace.shared.errors import AuthenticationError, NotFoundError
from marketplace.shared.parsing import is_blank
from marketplace.shared.phone import PhoneNumber
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="User")
class RegisterUser:
    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(required=True, max_length=100)
    address = Text(required=True)
    phone_number = String(required=True, max_length=20)


@marketplace.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(
            user_id=command.user_id,
            email=command.email,
            name=command.name,
            address=command.address,
            phone_number=command.phone_number,
        )
        current_domain.repository_for(User).add(user)
        logger.info("user_registered", user_id=str(user.id))
        return str(user.id)


def register(email, password, name, address, phone_number):
    """Create the identity account, then the marketplace profile keyed by its id."""
    if is_blank(email, password, name, address, phone_number):
        raise ValidationError({"user": ["Email, password, nama, alamat, dan nomor telepon wajib"]})

    # Reject a malformed profile before an account exists for it
    User(
        email=EmailAddress(address=email),
        name=name,
        address=address,
        phone_number=PhoneNumber(number=phone_number),
    )

    account = get_identity_provider().create_account(email, password)
    command = RegisterUser(
        user_id=account.id,
        email=email,
        name=name,
        address=address,
        phone_number=phone_number,
    )
    return current_domain.process(command, asynchronous=False)


def login(email, password) -> str:
    if is_blank(email, password):
        raise ValidationError({"credentials": ["Email dan password wajib"]})

    account = get_identity_provider().authenticate(email, password)
    logger.info("user_logged_in", user_id=account.id)
    return issue_token(account.id)


def resolve_subject(token: str) -> str:
    """Verify a bearer token and return the account id it belongs to."""
    account_id = read_token(token)
    if get_identity_provider().get_account_by_id(account_id) is None:
        raise AuthenticationError("Token tidak valid")
    return account_id


def profile(user_id) -> User:
    user = CatalogAccessor().find_user(user_id)
    if user is None:
        raise NotFoundError("Profil user tidak ditemukan")
    return user
