"""In-memory image host for development and testing.

Keeps every upload in memory and hands back a deterministic-looking URL.
Can be told to fail so that error paths are testable.
"""

from uuid import uuid4

from marketplace.imaging.port import ImageHost, ImageUpload
from marketplace.shared.errors import DependencyError


class FakeImageHost(ImageHost):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.uploads: list[dict] = []

    def configure(self, should_succeed: bool) -> None:
        self.should_succeed = should_succeed

    def upload(self, image: ImageUpload, folder: str) -> str:
        if not self.should_succeed:
            raise DependencyError("Gagal mengunggah gambar")

        url = f"https://images.example.test/{folder}/{uuid4().hex[:12]}"
        self.uploads.append(
            {
                "folder": folder,
                "filename": image.filename,
                "size": len(image.content),
                "url": url,
            }
        )
        return url
