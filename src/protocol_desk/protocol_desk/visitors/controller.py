from __future__ import annotations

import logging

from flask import Flask, request

from ..auth.guards import admin_required, current_user, login_required
from ..common.responses import error, error_from, json_body, success
from ..container import Container
from ..core.exceptions import DomainError
from .transform import visitor_to_wire

logger = logging.getLogger(__name__)


def _booking_to_wire(result) -> dict:
    return {
        "leader": visitor_to_wire(result.leader),
        "companions": [visitor_to_wire(v) for v in result.companions],
        "failed": [{"index": f.index, "name": f.name, "message": f.message} for f in result.failures],
        "failedCount": result.failed,
        "total": result.requested,
        "groupId": result.group_id,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/visitors", methods=["GET"], endpoint="api_list_visitors")
    @login_required
    def list_visitors():
        try:
            visitors = container.visitor_service.list(search=request.args.get("search"))
            return success([visitor_to_wire(v) for v in visitors])
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to fetch visitors")
            return error("Failed to fetch visitors", 500)

    @app.route("/api/visitors", methods=["POST"], endpoint="api_create_visitor")
    @login_required
    def create_visitor():
        try:
            payload = request.get_json(silent=True)
            visitor = container.visitor_service.create(current_user(), payload)
            return success(visitor_to_wire(visitor))
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to create visitor")
            return error("Failed to create visitor", 500)

    @app.route("/api/visitors/group", methods=["POST"], endpoint="api_book_group")
    @login_required
    def book_group():
        try:
            body = json_body()
            result = container.group_booking_service.book(
                current_user(), body.get("leader"), body.get("companions")
            )
            return success(_booking_to_wire(result), message=result.summary())
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to create visitor group")
            return error("Failed to create visitors", 500)

    @app.route("/api/visitors/<visitor_id>", methods=["GET"], endpoint="api_get_visitor")
    @login_required
    def get_visitor(visitor_id: str):
        try:
            return success(visitor_to_wire(container.visitor_service.get(visitor_id)))
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to fetch visitor %s", visitor_id)
            return error("Failed to fetch visitor", 500)

    @app.route("/api/visitors/<visitor_id>", methods=["PUT"], endpoint="api_update_visitor")
    @login_required
    def update_visitor(visitor_id: str):
        try:
            payload = request.get_json(silent=True)
            visitor = container.visitor_service.update(current_user(), visitor_id, payload)
            return success(visitor_to_wire(visitor))
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to update visitor %s", visitor_id)
            return error("Failed to update visitor", 500)

    @app.route("/api/visitors/<visitor_id>", methods=["DELETE"], endpoint="api_delete_visitor")
    @login_required
    def delete_visitor(visitor_id: str):
        try:
            deleted = container.visitor_service.delete(current_user(), visitor_id)
            return success({"deletedCount": deleted}, message="Visitor deleted successfully")
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to delete visitor %s", visitor_id)
            return error("Failed to delete visitor", 500)

    @app.route("/api/visitors/<visitor_id>/companions", methods=["POST"], endpoint="api_add_companions")
    @admin_required
    def add_companions(visitor_id: str):
        try:
            body = json_body()
            result = container.group_booking_service.add_companions(
                current_user(), visitor_id, body.get("companions")
            )
            return success(_booking_to_wire(result), message=result.summary())
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to add companions to %s", visitor_id)
            return error("Failed to add companions", 500)

    @app.route("/api/visitors/<visitor_id>/group", methods=["DELETE"], endpoint="api_detach_visitor")
    @admin_required
    def detach_visitor(visitor_id: str):
        try:
            visitor = container.visitor_service.detach_from_group(current_user(), visitor_id)
            return success(visitor_to_wire(visitor), message="Visitor removed from group")
        except DomainError as e:
            return error_from(e)
        except Exception:
            logger.exception("Failed to detach visitor %s", visitor_id)
            return error("Failed to update visitor", 500)
