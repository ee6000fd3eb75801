"""Product image hosting on Cloudinary."""

import io
import logging
import uuid
from typing import Any

import cloudinary
import cloudinary.api
import cloudinary.uploader

from src.config import CLOUDINARY_CONFIG, IMAGE_FOLDER

logger = logging.getLogger(__name__)


class ImageStoreError(Exception):
    """Raised when the image host rejects or fails a request."""


class CloudinaryImageStore:
    def __init__(self, config: dict[str, Any] | None = None, folder: str = IMAGE_FOLDER):
        cloudinary.config(**(config or CLOUDINARY_CONFIG))
        self.folder = folder
        self.upload_options = {
            "resource_type": "image",
            "transformation": [
                {"width": 800, "height": 800, "crop": "limit"},
                {"quality": "auto"},
                {"fetch_format": "auto"},
            ],
            "tags": ["product", "catalog"],
        }

    def upload(self, data: bytes, file_name: str | None = None) -> dict[str, Any]:
        """
        Upload an image.

        Args:
            data: Raw image bytes
            file_name: Original file name (kept as context metadata only)

        Returns:
            Dict with the public url, the image handle and basic metadata
        """
        if not data:
            raise ImageStoreError("Image content is empty")

        options = dict(self.upload_options, folder=self.folder, public_id=f"product_{uuid.uuid4().hex}")
        if file_name:
            options["context"] = {"file_name": file_name}

        try:
            result = cloudinary.uploader.upload(io.BytesIO(data), **options)
        except Exception as e:
            logger.error(f"Error uploading image to Cloudinary: {e}")
            raise ImageStoreError(str(e)) from e

        logger.info(f"Image uploaded to Cloudinary: {result['public_id']}")
        return {
            "url": result["secure_url"],
            "image_id": result["public_id"],
            "width": result.get("width"),
            "height": result.get("height"),
            "format": result.get("format"),
        }

    def delete(self, image_id: str) -> dict[str, Any]:
        """Delete an image by its handle."""
        if not image_id:
            raise ImageStoreError("An image id is required to delete an image")

        try:
            result = cloudinary.uploader.destroy(image_id)
        except Exception as e:
            logger.error(f"Error deleting image {image_id} from Cloudinary: {e}")
            raise ImageStoreError(str(e)) from e

        logger.info(f"Image deleted from Cloudinary: {image_id}")
        return result

    def replace(self, old_image_id: str | None, data: bytes, file_name: str | None = None) -> dict[str, Any]:
        """Upload a new image, then drop the old one. Failing to drop the old image is only logged."""
        new_image = self.upload(data, file_name)

        if old_image_id:
            try:
                self.delete(old_image_id)
            except ImageStoreError as e:
                logger.warning(f"Could not delete previous image {old_image_id}: {e}")

        return new_image

    def ping(self) -> bool:
        try:
            result = cloudinary.api.ping()
        except Exception as e:
            logger.error(f"Error connecting to Cloudinary: {e}")
            return False
        return result.get("status") == "ok"
