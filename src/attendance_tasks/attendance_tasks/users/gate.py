from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.enums import AuthFailure, Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .model import AuthUser
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthenticationError("No token provided", AuthFailure.MISSING_TOKEN)
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise AuthenticationError("No token provided", AuthFailure.MISSING_TOKEN)
    return token


class AuthGate:
    """Turn an Authorization header into the authenticated user.

    Read-only: verifies the token, then reloads the user so deactivated or
    deleted accounts are rejected even while their tokens are unexpired.
    """

    def __init__(self, tokens: TokenService, users: UserRepository):
        self._tokens = tokens
        self._users = users

    def authenticate(self, authorization: Optional[str]) -> AuthUser:
        try:
            token = extract_bearer_token(authorization)
            user_id = self._tokens.verify(token)
            user = self._users.get_by_id(user_id)
            if not user or not user.is_active:
                raise AuthenticationError("User not found or inactive", AuthFailure.INACTIVE_OR_UNKNOWN)
        except AuthenticationError as e:
            logger.warning("Request rejected: %s", e.reason.value)
            raise
        return user.to_auth_user()


def require_role(user: AuthUser, roles: Iterable[Role]) -> None:
    if user.role not in set(roles):
        raise AuthorizationError("Insufficient permissions")
