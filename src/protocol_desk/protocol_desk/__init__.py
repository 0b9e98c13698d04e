"""Protocol Desk package.

Visitor logistics for a protocol department, organized by feature modules
(visitors, groups, grouping, dashboard, auth, photos, drivers) with a thin
Flask controller layer over services and repositories.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
