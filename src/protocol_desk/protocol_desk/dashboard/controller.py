from __future__ import annotations

import logging

from flask import Flask, flash, render_template, request

from ..auth.guards import current_user, login_required, page_login_required
from ..common.responses import error, error_from, success
from ..container import Container
from ..core.exceptions import DomainError
from .service import dashboard_to_wire, empty_dashboard

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @login_required
    def api_dashboard():
        try:
            view = container.dashboard_service.build(search=request.args.get("search"))
            return success(dashboard_to_wire(view))
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to build dashboard")
            return error("Failed to fetch visitors", 500)

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @page_login_required
    def dashboard():
        search = (request.args.get("search") or "").strip()
        try:
            view = container.dashboard_service.build(search=search)
        except DomainError as e:
            flash(str(e), "danger")
            view = empty_dashboard(search)
        except Exception:
            logger.exception("Failed to build dashboard page")
            flash("Failed to fetch visitors", "danger")
            view = empty_dashboard(search)
        return render_template(
            "dashboard.html",
            view=view,
            current_user=current_user(),
            department_name=container.department_name,
        )
