from __future__ import annotations

import re

from ..core.exceptions import InvalidIdError

_VISITOR_ID = re.compile(r"^[0-9a-f]{24}$", re.IGNORECASE)


def require_visitor_id(value: str) -> str:
    if not isinstance(value, str) or not _VISITOR_ID.match(value):
        raise InvalidIdError("Invalid visitor ID")
    return value.lower()
