"""Request context for authenticated and optionally-authenticated routes."""

from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.account.registration import resolve_subject
from marketplace.shared.errors import AuthenticationError, MarketplaceError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Anonymous:
    pass


@dataclass(frozen=True)
class Authenticated:
    subject_id: str


RequestContext = Anonymous | Authenticated


async def require_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> Authenticated:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token diperlukan")
    return Authenticated(subject_id=resolve_subject(credentials.credentials))


async def optional_user(credentials: HTTPAuthorizationCredentials | None = Depends(bearer)) -> RequestContext:
    """A token that cannot be verified, for any reason, makes the caller anonymous."""
    if credentials is None or not credentials.credentials:
        return Anonymous()
    try:
        return Authenticated(subject_id=resolve_subject(credentials.credentials))
    except MarketplaceError as exc:
        logger.warning("optional_token_ignored", reason=exc.message)
        return Anonymous()


def owned_filter(context: RequestContext, owned: str | None) -> str | None:
    """Owner id to filter by for ``owned=true``, only when the caller is known."""
    if owned == "true" and isinstance(context, Authenticated):
        return context.subject_id
    return None
