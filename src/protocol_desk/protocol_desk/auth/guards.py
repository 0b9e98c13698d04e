from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, g, redirect, request, url_for

from ..common.responses import error
from ..core.constants import AUTH_COOKIE_NAME
from .model import SessionUser
from .tokens import SessionTokenSigner


def token_from_request() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return request.cookies.get(AUTH_COOKIE_NAME)


def load_current_user(signer: SessionTokenSigner) -> None:
    g.current_user = signer.verify(token_from_request())


def current_user() -> Optional[SessionUser]:
    return g.get("current_user")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return error("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return error("Unauthorized", 401)
        if not user.can_write:
            return error("Only admins can perform this action", 403)
        return view(*args, **kwargs)

    return wrapper


def page_login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper
