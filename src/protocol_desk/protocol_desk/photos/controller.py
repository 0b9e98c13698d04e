from __future__ import annotations

import logging

from flask import Flask, request

from ..auth.guards import admin_required
from ..common.responses import error, error_from, success
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..visitors.transform import photo_to_wire
from .model import PhotoBatchResult, PhotoFile

logger = logging.getLogger(__name__)


def _batch_to_wire(result: PhotoBatchResult) -> dict:
    return {
        "photos": [photo_to_wire(p) for p in result.photos],
        "errors": [{"filename": e.filename, "message": e.message} for e in result.errors],
        "completed": result.completed,
        "total": result.total,
    }


def _existing_count() -> int:
    raw = request.form.get("existingCount") or "0"
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("existingCount must be an integer")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/photos", methods=["POST"], endpoint="api_upload_photos")
    @admin_required
    def upload_photos():
        try:
            files = [
                PhotoFile(
                    filename=f.filename or "",
                    content_type=f.mimetype or "",
                    content=f.read(),
                )
                for f in request.files.getlist("files")
            ]
            if not files:
                raise ValidationError("No files provided")

            result = container.photo_service.upload_batch(
                files,
                existing_count=_existing_count(),
                on_progress=lambda done, total: logger.debug("Uploaded %s/%s photos", done, total),
            )
            if result.all_failed:
                return error("Failed to upload photos", 500, data=_batch_to_wire(result))
            return success(_batch_to_wire(result))
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Photo upload failed")
            return error("Failed to upload photos", 500)
