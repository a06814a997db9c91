"""Process settings read from the environment.

Domain and persistence configuration lives in ``domain.toml``; this module
covers the outer collaborators (tokens, identity provider, image host).
"""

import os

_DEV_JWT_SECRET = "pasarku-dev-secret"


def is_production() -> bool:
    return os.getenv("PROTEAN_ENV") == "production"


def jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if secret:
        return secret
    if is_production():
        raise RuntimeError("JWT_SECRET must be set in production")
    return _DEV_JWT_SECRET


def token_ttl_seconds() -> int:
    return int(os.getenv("TOKEN_TTL_SECONDS", "3600"))


def identity_provider_name() -> str:
    return os.getenv("IDENTITY_PROVIDER", "local").lower()


def image_host_name() -> str:
    return os.getenv("IMAGE_HOST", "fake").lower()


def cloudinary_credentials() -> dict:
    return {
        "cloud_name": os.getenv("CLOUDINARY_CLOUD_NAME"),
        "api_key": os.getenv("CLOUDINARY_API_KEY"),
        "api_secret": os.getenv("CLOUDINARY_API_SECRET"),
    }


def firebase_service_account() -> str | None:
    return os.getenv("FIREBASE_SERVICE_ACCOUNT")


def firebase_web_api_key() -> str | None:
    return os.getenv("FIREBASE_WEB_API_KEY")
