from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.responses import error, error_from, json_body, success
from ..container import Container
from ..core.constants import AUTH_COOKIE_NAME
from ..core.exceptions import DomainError
from .guards import current_user, login_required
from .model import SessionUser

logger = logging.getLogger(__name__)


def _user_to_wire(user: SessionUser) -> dict:
    return {
        "id": user.user_id,
        "email": user.email,
        "name": user.name,
        "isAdmin": user.is_admin,
        "isSuperUser": user.is_super_user,
    }


def register(app: Flask, container: Container) -> None:
    def set_auth_cookie(response, token: str):
        response.set_cookie(
            AUTH_COOKIE_NAME,
            token,
            max_age=container.token_signer.max_age_seconds,
            httponly=True,
            secure=not bool(app.config.get("DEBUG", False)) and not app.testing,
            samesite="Lax",
            path="/",
        )
        return response

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        body = json_body()
        try:
            user = container.auth_service.authenticate(body.get("email") or "", body.get("password") or "")
            token = container.token_signer.issue(user)
            response, status = success({"token": token, "user": _user_to_wire(user)})
            return set_auth_cookie(response, token), status
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Login error")
            return error("Internal server error", 500)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        response, status = success(message="Logged out")
        response.delete_cookie(AUTH_COOKIE_NAME, path="/")
        return response, status

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        return success(_user_to_wire(current_user()))

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                user = container.auth_service.authenticate(email, password)
                flash(f"Welcome back, {user.name or user.email}!", "success")
                return set_auth_cookie(redirect(url_for("dashboard")), container.token_signer.issue(user))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception as e:
                logger.exception("Login error")
                if bool(app.config.get("DEBUG", False)):
                    flash(f"Internal server error: {e}", "danger")
                else:
                    flash("Internal server error", "danger")

        return render_template("login.html", department_name=container.department_name)

    @app.route("/logout", endpoint="logout")
    def logout():
        flash("You have been signed out.", "info")
        response = redirect(url_for("login"))
        response.delete_cookie(AUTH_COOKIE_NAME, path="/")
        return response
