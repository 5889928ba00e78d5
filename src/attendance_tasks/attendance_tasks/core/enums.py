from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status recorded with a daily check-in."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half-day"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort rank, most severe first (high=1, medium=2, low=3)."""
        return _PRIORITY_RANK[self]

    @classmethod
    def by_severity(cls) -> list["TaskPriority"]:
        return sorted(cls, key=lambda p: p.rank)


_PRIORITY_RANK = {
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


class TaskStatus(str, Enum):
    """Free-standing task status; any value may be set from any other."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AuthFailure(str, Enum):
    """Why a request or login was rejected as unauthenticated."""

    MISSING_TOKEN = "missing-token"
    EXPIRED = "expired"
    INVALID = "invalid"
    INACTIVE_OR_UNKNOWN = "inactive-or-unknown"
    BAD_CREDENTIALS = "bad-credentials"
