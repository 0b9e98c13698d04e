from __future__ import annotations

import pytest

from src.protocol_desk.protocol_desk.core.exceptions import ValidationError
from src.protocol_desk.protocol_desk.photos.model import PhotoFile
from src.protocol_desk.protocol_desk.photos.service import PhotoUploadService


def image(name: str, size: int = 10, content_type: str = "image/jpeg") -> PhotoFile:
    return PhotoFile(filename=name, content_type=content_type, content=b"x" * size)


def test_uploads_sequentially_and_reports_progress(uploader):
    progress = []
    service = PhotoUploadService(uploader)

    result = service.upload_batch(
        [image("a.jpg"), image("b.jpg"), image("c.jpg")],
        on_progress=lambda done, total: progress.append((done, total)),
    )

    assert uploader.calls == ["a.jpg", "b.jpg", "c.jpg"]
    assert progress == [(1, 3), (2, 3), (3, 3)]
    assert [p.url for p in result.photos] == [
        "https://img.example/a.jpg",
        "https://img.example/b.jpg",
        "https://img.example/c.jpg",
    ]
    assert (result.completed, result.total) == (3, 3)
    assert not result.all_failed


def test_one_failure_does_not_abort_the_batch(uploader):
    uploader.fail_on.add("b.jpg")

    result = PhotoUploadService(uploader).upload_batch([image("a.jpg"), image("b.jpg"), image("c.jpg")])

    assert uploader.calls == ["a.jpg", "b.jpg", "c.jpg"]
    assert [p.public_id for p in result.photos] == ["protocol-visitors/a.jpg", "protocol-visitors/c.jpg"]
    assert [(e.filename, e.message) for e in result.errors] == [("b.jpg", "Upload failed")]


def test_every_upload_failing_is_flagged(uploader):
    uploader.fail_on.update({"a.jpg", "b.jpg"})

    result = PhotoUploadService(uploader).upload_batch([image("a.jpg"), image("b.jpg")])

    assert result.all_failed
    assert len(result.errors) == 2


def test_non_images_and_oversized_files_are_rejected_per_file(uploader):
    service = PhotoUploadService(uploader, max_bytes=100)

    result = service.upload_batch(
        [image("doc.pdf", content_type="application/pdf"), image("huge.jpg", size=101), image("ok.png")]
    )

    assert uploader.calls == ["ok.png"]
    messages = {e.filename: e.message for e in result.errors}
    assert messages["doc.pdf"] == "Only image files are allowed"
    assert messages["huge.jpg"].startswith("File size must be less than")
    assert result.total == 1


def test_default_size_limit_message(uploader):
    result = PhotoUploadService(uploader).upload_batch([image("huge.jpg", size=10 * 1024 * 1024 + 1)])

    assert result.errors[0].message == "File size must be less than 10MB"
    assert result.total == 0
    assert not result.all_failed


def test_files_beyond_remaining_slots_are_ignored(uploader):
    files = [image(f"{i}.jpg") for i in range(5)]

    result = PhotoUploadService(uploader).upload_batch(files, existing_count=8)

    assert uploader.calls == ["0.jpg", "1.jpg"]
    assert len(result.photos) == 2


def test_full_visitor_rejects_more_photos(uploader):
    with pytest.raises(ValidationError, match="Maximum 10 photos allowed"):
        PhotoUploadService(uploader).upload_batch([image("a.jpg")], existing_count=10)
    assert uploader.calls == []
