from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        now: datetime,
    ) -> User:
        """Insert a user; raises `DuplicateKeyError` when the email is taken."""

        raise NotImplementedError

    def set_active(self, user_id: str, *, is_active: bool, now: datetime) -> bool:
        raise NotImplementedError
