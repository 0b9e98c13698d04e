"""JSON envelope helpers shared by every API controller.

Every response has the shape ``{"status": "success" | "error", "data"?, "message"?}``.
"""
from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.enums import ResponseStatus
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    DomainError,
    InvalidIdError,
    NotFoundError,
    UploadError,
    ValidationError,
)

_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    InvalidIdError: 400,
    AuthenticationError: 401,
    AuthorizationError: 403,
    NotFoundError: 404,
    UploadError: 500,
    ConfigurationError: 500,
}


def status_code_for(exc: DomainError) -> int:
    for exc_type, code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return 500


def success(data: Any = None, *, message: Optional[str] = None, status_code: int = 200):
    body: dict[str, Any] = {"status": ResponseStatus.SUCCESS.value}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status_code


def error(message: str, status_code: int, *, data: Any = None):
    body: dict[str, Any] = {"status": ResponseStatus.ERROR.value, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status_code


def error_from(exc: DomainError):
    return error(str(exc), status_code_for(exc))


def json_body() -> dict:
    """The request's JSON object, or an empty dict for anything else."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
