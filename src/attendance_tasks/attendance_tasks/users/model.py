from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user account.

    Note: Plain data object; `password_hash` never leaves the users module
    (see `PublicUser`).
    """

    id: str
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public(self) -> "PublicUser":
        return PublicUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_auth_user(self) -> "AuthUser":
        return AuthUser(id=self.id, name=self.name, email=self.email, role=self.role)


@dataclass(frozen=True)
class PublicUser:
    """User as returned to API callers (no credential fields)."""

    id: str
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


@dataclass(frozen=True)
class AuthUser:
    """Authenticated-user context passed to request handlers."""

    id: str
    name: str
    email: str
    role: Role


def normalize_email(email: str) -> str:
    return email.strip().lower()
