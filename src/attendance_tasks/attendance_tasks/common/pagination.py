from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    limit: int


def page_request(args, *, default_limit: int) -> PageRequest:
    """Build a PageRequest from already-validated query args."""
    return PageRequest(page=int(args.get("page") or 1), limit=int(args.get("limit") or default_limit))
