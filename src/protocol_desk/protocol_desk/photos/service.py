from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence

from ..core.constants import MAX_PHOTO_BYTES, MAX_PHOTOS_PER_VISITOR
from ..core.exceptions import UploadError, ValidationError
from ..visitors.model import VisitorPhoto
from .model import PhotoBatchResult, PhotoError, PhotoFile

logger = logging.getLogger(__name__)


class PhotoUploader(Protocol):
    def upload(self, photo: PhotoFile) -> VisitorPhoto:
        raise NotImplementedError


class PhotoUploadService:
    """Upload a batch of images one file at a time.

    A failing file is recorded and the batch carries on with the next one.
    """

    def __init__(
        self,
        uploader: PhotoUploader,
        *,
        max_photos: int = MAX_PHOTOS_PER_VISITOR,
        max_bytes: int = MAX_PHOTO_BYTES,
    ):
        self._uploader = uploader
        self._max_photos = int(max_photos)
        self._max_bytes = int(max_bytes)

    def _check(self, photo: PhotoFile) -> Optional[str]:
        if not (photo.content_type or "").startswith("image/"):
            return "Only image files are allowed"
        if photo.size > self._max_bytes:
            return f"File size must be less than {self._max_bytes // (1024 * 1024)}MB"
        return None

    def upload_batch(
        self,
        files: Sequence[PhotoFile],
        *,
        existing_count: int = 0,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> PhotoBatchResult:
        remaining = self._max_photos - max(0, int(existing_count))
        if remaining <= 0:
            raise ValidationError(f"Maximum {self._max_photos} photos allowed")

        errors: list[PhotoError] = []
        valid: list[PhotoFile] = []
        for photo in list(files)[:remaining]:
            problem = self._check(photo)
            if problem:
                errors.append(PhotoError(filename=photo.filename, message=problem))
            else:
                valid.append(photo)

        uploaded: list[VisitorPhoto] = []
        total = len(valid)
        for done, photo in enumerate(valid, start=1):
            try:
                uploaded.append(self._uploader.upload(photo))
            except UploadError as e:
                logger.warning("Photo %s failed: %s", photo.filename, e)
                errors.append(PhotoError(filename=photo.filename, message=str(e)))
            if on_progress:
                on_progress(done, total)

        return PhotoBatchResult(photos=tuple(uploaded), errors=tuple(errors), completed=total, total=total)
