from __future__ import annotations

import logging

from flask import Flask

from ..auth.guards import login_required
from ..common.responses import error, error_from, json_body, success
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/drivers/generate-link", methods=["POST"], endpoint="api_generate_driver_link")
    @login_required
    def generate_driver_link():
        try:
            link = container.driver_link_service.generate(json_body().get("visitorId"))
            return success({"link": link.link, "visitor": link.visitor})
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to generate driver link")
            return error("Failed to generate driver link", 500)
