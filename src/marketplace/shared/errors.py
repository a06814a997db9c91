"""Error kinds raised by the marketplace outside of Protean's own exceptions.

Input problems use ``protean.exceptions.ValidationError`` (400). Each class
below carries the HTTP status the API layer answers with.
"""


class MarketplaceError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(MarketplaceError):
    """Missing, malformed, expired or unresolvable bearer token."""

    status_code = 401


class AuthorizationError(MarketplaceError):
    """The actor does not own the resource or lacks the required role."""

    status_code = 403


class NotFoundError(MarketplaceError):
    status_code = 404


class InvalidStatusTransition(MarketplaceError):
    """The order's current status does not allow the requested status."""

    status_code = 409


class DependencyError(MarketplaceError):
    """An external collaborator (identity provider, image host) failed."""

    status_code = 500
