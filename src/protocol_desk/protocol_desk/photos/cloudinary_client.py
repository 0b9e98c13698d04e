from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import requests

from ..core.constants import DEFAULT_UPLOAD_TIMEOUT_SECONDS, PHOTO_FOLDER
from ..core.exceptions import UploadError
from ..visitors.model import VisitorPhoto
from .model import PhotoFile

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_message(resp) -> Optional[str]:
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message")
    return None


class CloudinaryClient:
    """Unsigned uploads to Cloudinary through an upload preset."""

    def __init__(
        self,
        cloud_name: Optional[str],
        upload_preset: Optional[str],
        *,
        folder: str = PHOTO_FOLDER,
        timeout: float = DEFAULT_UPLOAD_TIMEOUT_SECONDS,
    ):
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._folder = folder
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._cloud_name and self._upload_preset)

    def upload(self, photo: PhotoFile) -> VisitorPhoto:
        if not self.configured:
            raise UploadError(
                "Cloudinary configuration is missing. Please set CLOUDINARY_CLOUD_NAME "
                "and CLOUDINARY_UPLOAD_PRESET in your environment variables."
            )

        try:
            resp = requests.post(
                UPLOAD_URL.format(cloud_name=self._cloud_name),
                data={"upload_preset": self._upload_preset, "folder": self._folder},
                files={"file": (photo.filename, photo.content, photo.content_type)},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Upload of %s failed: %s", photo.filename, e)
            raise UploadError("Failed to upload image") from e

        if not resp.ok:
            raise UploadError(_error_message(resp) or "Failed to upload image")

        try:
            data = resp.json()
            return VisitorPhoto(url=data["secure_url"], public_id=data["public_id"], uploaded_at=_utc_now_iso())
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Unexpected upload response for %s: %s", photo.filename, e)
            raise UploadError("Failed to upload image") from e
