"""
QueryResult — total-count-plus-page envelope returned by paged queries.

``total_count`` is the number of records matching the filters before
paging; ``items`` is the requested page. ``status`` tells an empty page
caused by "no matches" apart from one caused by a failure or a
cancellation, while keeping the ``(total_count, items)`` shape that
callers rely on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class QueryStatus(str, Enum):
    """Outcome of a paged query."""

    OK = "ok"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Immutable result of a filtered, sorted and paged query."""

    total_count: int = 0
    items: list[T] = field(default_factory=lambda: cast("list[T]", []))
    status: QueryStatus = QueryStatus.OK
    error: str | None = None

    def __post_init__(self) -> None:
        if self.total_count < 0:
            raise ValueError("total_count cannot be negative")
        if self.total_count == 0 and self.items:
            raise ValueError("A result with total_count == 0 cannot contain items")

    @classmethod
    def empty(cls) -> QueryResult[T]:
        """An OK result with no matches."""
        return cls()

    @classmethod
    def failed(cls, error: str | None = None) -> QueryResult[T]:
        return cls(status=QueryStatus.FAILED, error=error)

    @classmethod
    def cancelled(cls) -> QueryResult[T]:
        return cls(status=QueryStatus.CANCELLED)

    @property
    def succeeded(self) -> bool:
        return self.status is QueryStatus.OK

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self, serialize: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """
        Serialise to a JSON-compatible dictionary.

        Args:
            serialize: Optional per-item converter (e.g. ``model_dump`` or
                ``dataclasses.asdict``). Items are passed through unchanged
                when omitted.
        """
        return {
            "total_count": self.total_count,
            "items": [serialize(item) for item in self.items]
            if serialize is not None
            else list(self.items),
            "status": self.status.value,
            "error": self.error,
        }
