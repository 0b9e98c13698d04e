from __future__ import annotations

import pytest
import requests

from src.protocol_desk.protocol_desk.core.exceptions import UploadError
from src.protocol_desk.protocol_desk.photos import cloudinary_client
from src.protocol_desk.protocol_desk.photos.cloudinary_client import CloudinaryClient
from src.protocol_desk.protocol_desk.photos.model import PhotoFile


class FakeResponse:
    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


PHOTO = PhotoFile(filename="face.jpg", content_type="image/jpeg", content=b"\xff\xd8\xff")


def test_unsigned_upload_request(monkeypatch):
    captured = {}

    def fake_post(url, data=None, files=None, timeout=None):
        captured.update(url=url, data=data, files=files, timeout=timeout)
        return FakeResponse(200, {"secure_url": "https://res.cloudinary.com/x/face.jpg", "public_id": "protocol-visitors/face"})

    monkeypatch.setattr(cloudinary_client.requests, "post", fake_post)

    photo = CloudinaryClient("demo", "unsigned", timeout=7).upload(PHOTO)

    assert captured["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert captured["data"] == {"upload_preset": "unsigned", "folder": "protocol-visitors"}
    assert captured["files"]["file"] == ("face.jpg", b"\xff\xd8\xff", "image/jpeg")
    assert captured["timeout"] == 7
    assert photo.url == "https://res.cloudinary.com/x/face.jpg"
    assert photo.public_id == "protocol-visitors/face"
    assert photo.uploaded_at.endswith("Z")


def test_missing_configuration(monkeypatch):
    def fail_post(*args, **kwargs):
        raise AssertionError("should not be called")

    monkeypatch.setattr(cloudinary_client.requests, "post", fail_post)

    client = CloudinaryClient("", None)
    assert not client.configured
    with pytest.raises(UploadError, match="Cloudinary configuration is missing"):
        client.upload(PHOTO)


def test_error_message_from_cloudinary(monkeypatch):
    monkeypatch.setattr(
        cloudinary_client.requests,
        "post",
        lambda *a, **kw: FakeResponse(400, {"error": {"message": "Upload preset not found"}}),
    )

    with pytest.raises(UploadError, match="Upload preset not found"):
        CloudinaryClient("demo", "missing").upload(PHOTO)


def test_non_json_error_falls_back_to_generic_message(monkeypatch):
    monkeypatch.setattr(
        cloudinary_client.requests,
        "post",
        lambda *a, **kw: FakeResponse(502, ValueError("not json")),
    )

    with pytest.raises(UploadError, match="Failed to upload image"):
        CloudinaryClient("demo", "unsigned").upload(PHOTO)


def test_network_error_becomes_upload_error(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(cloudinary_client.requests, "post", boom)

    with pytest.raises(UploadError, match="Failed to upload image"):
        CloudinaryClient("demo", "unsigned").upload(PHOTO)


@pytest.mark.parametrize(
    "payload",
    [
        {"public_id": "protocol-visitors/face"},
        ValueError("not json"),
        ["unexpected"],
    ],
)
def test_malformed_success_response_becomes_upload_error(monkeypatch, payload):
    monkeypatch.setattr(cloudinary_client.requests, "post", lambda *a, **kw: FakeResponse(200, payload))

    with pytest.raises(UploadError, match="Failed to upload image"):
        CloudinaryClient("demo", "unsigned").upload(PHOTO)


def test_error_body_that_is_not_an_object(monkeypatch):
    monkeypatch.setattr(cloudinary_client.requests, "post", lambda *a, **kw: FakeResponse(400, ["bad"]))

    with pytest.raises(UploadError, match="Failed to upload image"):
        CloudinaryClient("demo", "unsigned").upload(PHOTO)
