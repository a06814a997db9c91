"""Cloudinary image host adapter."""

import io

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from marketplace.imaging.port import ImageHost, ImageUpload
from marketplace.shared.errors import DependencyError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class CloudinaryImageHost(ImageHost):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    def upload(self, image: ImageUpload, folder: str) -> str:
        try:
            result = cloudinary.uploader.upload(io.BytesIO(image.content), folder=folder)
        except CloudinaryError as exc:
            logger.error("image_upload_failed", folder=folder, error=str(exc))
            raise DependencyError("Gagal mengunggah gambar") from exc
        return result["secure_url"]
