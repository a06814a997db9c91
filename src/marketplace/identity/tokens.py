"""Bearer tokens minted by the marketplace itself.

The identity provider only vouches for credentials; sessions are HS256 JWTs
carrying the account id as ``uid`` and expiring after one hour by default.
"""

from datetime import UTC, datetime, timedelta

import jwt

from marketplace.shared.errors import AuthenticationError
from marketplace.utils import settings

ALGORITHM = "HS256"


def issue_token(account_id: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "uid": account_id,
        "iat": now,
        "exp": now + timedelta(seconds=settings.token_ttl_seconds()),
    }
    return jwt.encode(payload, settings.jwt_secret(), algorithm=ALGORITHM)


def read_token(token: str) -> str:
    """Return the account id a token was issued for."""
    try:
        payload = jwt.decode(token, settings.jwt_secret(), algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        raise AuthenticationError("Token tidak valid") from None

    account_id = payload.get("uid")
    if not account_id:
        raise AuthenticationError("Token tidak valid")
    return str(account_id)
