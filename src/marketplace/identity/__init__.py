"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap implementations:
- LocalIdentityProvider (default) for development, tests and self-hosting
- FirebaseIdentityProvider when IDENTITY_PROVIDER=firebase
"""

from marketplace.identity.port import IdentityProvider
from marketplace.utils import settings

_current_provider: IdentityProvider | None = None


def _build_provider() -> IdentityProvider:
    if settings.identity_provider_name() == "firebase":
        from marketplace.identity.firebase_adapter import FirebaseIdentityProvider

        return FirebaseIdentityProvider(
            service_account=settings.firebase_service_account(),
            web_api_key=settings.firebase_web_api_key(),
        )

    from marketplace.identity.local_adapter import LocalIdentityProvider

    return LocalIdentityProvider()


def get_identity_provider() -> IdentityProvider:
    """Return the current identity provider, building it from settings on first use."""
    global _current_provider
    if _current_provider is None:
        _current_provider = _build_provider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to the provider selected by settings."""
    global _current_provider
    _current_provider = None
