from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import utc_now
from ..core.constants import DEFAULT_PASSWORD_HASH_METHOD
from ..core.enums import AuthFailure, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, DuplicateKeyError
from .model import PublicUser, User, normalize_email
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """What signup/login hand back: a bearer token and the public user."""

    token: str
    user: PublicUser


class AuthService:
    """Use cases: signup and login.

    Login disclosure policy: an unknown email and a wrong password both fail
    with the same 401 "Invalid credentials". A disabled account is reported
    (403) only once the password has been verified.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        password_method: str = DEFAULT_PASSWORD_HASH_METHOD,
    ):
        self._users = users
        self._tokens = tokens
        self._password_method = password_method
        self._dummy_hash: Optional[str] = None

    def signup(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Role = Role.EMPLOYEE,
        now: Optional[datetime] = None,
    ) -> AuthResult:
        now = now or utc_now()
        email = normalize_email(email)
        password_hash = generate_password_hash(password, method=self._password_method)

        try:
            user = self._users.create_user(
                name=name.strip(),
                email=email,
                password_hash=password_hash,
                role=Role(role),
                now=now,
            )
        except DuplicateKeyError:
            raise ConflictError("Email already registered")

        logger.info("User registered: user_id=%s role=%s", user.id, user.role.value)
        return AuthResult(token=self._tokens.issue(user.id), user=user.to_public())

    def login(self, *, email: str, password: str) -> AuthResult:
        user = self._users.get_by_email(normalize_email(email))

        if not user:
            # keep timing close to the known-email path
            self._check_password(self._get_dummy_hash(), password)
            logger.warning("Login rejected: unknown email")
            raise AuthenticationError("Invalid credentials", AuthFailure.BAD_CREDENTIALS)

        if not self._check_password(user.password_hash, password):
            logger.warning("Login rejected: bad password for user_id=%s", user.id)
            raise AuthenticationError("Invalid credentials", AuthFailure.BAD_CREDENTIALS)

        if not user.is_active:
            logger.warning("Login rejected: inactive account user_id=%s", user.id)
            raise AuthorizationError("Account disabled")

        logger.info("User logged in: user_id=%s", user.id)
        return AuthResult(token=self._tokens.issue(user.id), user=user.to_public())

    def _check_password(self, password_hash: str, password: str) -> bool:
        try:
            return check_password_hash(password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes
            return False

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = generate_password_hash("dummy-password", method=self._password_method)
        return self._dummy_hash


class UserService:
    """Use case: account administration (activate / deactivate)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def set_active(self, user_id: str, *, is_active: bool, now: Optional[datetime] = None) -> bool:
        changed = self._users.set_active(user_id, is_active=is_active, now=now or utc_now())
        if changed:
            logger.info("User %s: user_id=%s", "activated" if is_active else "deactivated", user_id)
        return changed
