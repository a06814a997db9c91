"""Image host port (abstract interface).

Merchant photos, item photos and payment proofs are stored with an external
image host; the marketplace keeps only the returned URL.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded file as received from the client."""

    content: bytes
    filename: str = ""
    content_type: str | None = None


class ImageHost(ABC):
    """Abstract image host interface."""

    @abstractmethod
    def upload(self, image: ImageUpload, folder: str) -> str:
        """Store the image under ``folder`` and return its public HTTPS URL."""
        ...
