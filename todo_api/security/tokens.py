"""
Signed, time-limited identity tokens.

HS256 JWTs carrying ``userId``, ``email``, ``iat`` and ``exp``. The secret
is held by the ``TokenIssuer`` built once at startup from ``Settings``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = timedelta(days=7)


class TokenClaims(BaseModel):
    """Identity decoded from a verified token."""

    user_id: int
    email: str

    model_config = {"frozen": True}


class TokenIssuer:
    def __init__(self, secret: str, expires_in: timedelta = DEFAULT_EXPIRES_IN) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.expires_in = expires_in

    def issue(self, user_id: int, email: str, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Return the claims of a valid token, or ``None``.

        A token is valid when its signature matches this issuer's secret,
        ``exp`` is present and in the future, and it carries an integer
        ``userId`` and a string ``email``.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid token: %s", e)
            return None

        user_id = payload.get("userId")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(email, str):
            logger.debug("Rejected token with missing identity claims")
            return None
        return TokenClaims(user_id=user_id, email=email)
