from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import JWT_ALGORITHM
from ..core.enums import AuthFailure
from ..core.exceptions import AuthenticationError


class TokenService:
    """Stateless signed bearer tokens (HS256 JWT carrying `sub` and `exp`)."""

    def __init__(self, secret: str, *, lifetime: timedelta, algorithm: str = JWT_ALGORITHM):
        self._secret = secret
        self._lifetime = lifetime
        self._algorithm = algorithm

    def issue(self, user_id: str, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Return the user id embedded in a valid, unexpired token."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired", AuthFailure.EXPIRED)
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token", AuthFailure.INVALID)
        return str(payload["sub"])
