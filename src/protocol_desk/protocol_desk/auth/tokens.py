from __future__ import annotations

import logging
from typing import Optional

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_DAYS
from .model import SessionUser

logger = logging.getLogger(__name__)


class SessionTokenSigner:
    """Issue and verify the signed, timestamped session token."""

    def __init__(self, secret_key: str, *, max_age_days: int = DEFAULT_TOKEN_MAX_AGE_DAYS):
        self._serializer = URLSafeTimedSerializer(secret_key, salt="auth-token")
        self._max_age = int(max_age_days) * 24 * 60 * 60

    @property
    def max_age_seconds(self) -> int:
        return self._max_age

    def issue(self, user: SessionUser) -> str:
        return self._serializer.dumps(user.to_payload())

    def verify(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        try:
            payload = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            logger.info("Rejected expired session token")
            return None
        except BadData:
            return None
        if not isinstance(payload, dict):
            return None
        return SessionUser.from_payload(payload)
