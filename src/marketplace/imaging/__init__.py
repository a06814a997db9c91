"""Image host factory.

Provides get_image_host() / set_image_host() to swap implementations:
- FakeImageHost for development and testing (default)
- CloudinaryImageHost when IMAGE_HOST=cloudinary
"""

from marketplace.imaging.fake_adapter import FakeImageHost
from marketplace.imaging.port import ImageHost
from marketplace.utils import settings

_current_host: ImageHost | None = None


def get_image_host() -> ImageHost:
    """Return the current image host. Defaults to FakeImageHost."""
    global _current_host
    if _current_host is None:
        if settings.image_host_name() == "cloudinary":
            from marketplace.imaging.cloudinary_adapter import CloudinaryImageHost

            _current_host = CloudinaryImageHost(**settings.cloudinary_credentials())
        else:
            _current_host = FakeImageHost()
    return _current_host


def set_image_host(host: ImageHost) -> None:
    """Override the active image host (useful for tests)."""
    global _current_host
    _current_host = host


def reset_image_host() -> None:
    """Reset to the host selected by settings."""
    global _current_host
    _current_host = None
