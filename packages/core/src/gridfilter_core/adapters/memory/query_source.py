"""InMemoryQuerySource — sequence-backed IQuerySource for tests and small data."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from gridfilter_core.ports.query_source import IQuerySource

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gridfilter_core.domain.schema import FieldDescriptor
    from gridfilter_core.domain.specification import ISpecification

T = TypeVar("T")


def _null_low_key(field: FieldDescriptor) -> Any:
    """Sort key placing ``None`` before every other value.

    Enum members order by their position in the enum definition.
    """

    def key(record: Any) -> tuple[bool, Any]:
        value = field.get(record)
        if isinstance(value, Enum):
            value = list(type(value).__members__).index(value.name)
        return (value is not None, value)

    return key


class InMemoryQuerySource(IQuerySource[T], Generic[T]):
    """In-memory implementation of ``IQuerySource[T]``.

    Snapshots the records at construction. Filters and ordering are only
    recorded by ``where``/``order_by`` and evaluated on ``count``/``slice``.
    Ordering is stable: records with equal keys keep their original order.
    """

    def __init__(
        self,
        items: Iterable[T],
        *,
        _specifications: tuple[ISpecification[T], ...] = (),
        _ordering: tuple[FieldDescriptor, bool] | None = None,
    ) -> None:
        self._items: Sequence[T] = (
            items if isinstance(items, tuple) else tuple(items)
        )
        self._specifications = _specifications
        self._ordering = _ordering

    def where(self, specification: ISpecification[T]) -> InMemoryQuerySource[T]:
        return InMemoryQuerySource(
            self._items,
            _specifications=(*self._specifications, specification),
            _ordering=self._ordering,
        )

    def order_by(
        self, field: FieldDescriptor, *, ascending: bool = True
    ) -> InMemoryQuerySource[T]:
        return InMemoryQuerySource(
            self._items,
            _specifications=self._specifications,
            _ordering=(field, ascending),
        )

    async def count(self) -> int:
        return len(self._evaluate())

    async def slice(self, offset: int, limit: int) -> list[T]:
        if limit <= 0:
            return []
        offset = max(0, offset)
        return self._evaluate()[offset : offset + limit]

    # ── Internals ────────────────────────────────────────────────

    def _evaluate(self) -> list[T]:
        matches = [
            item
            for item in self._items
            if all(spec.is_satisfied_by(item) for spec in self._specifications)
        ]
        if self._ordering is None:
            return matches
        field, ascending = self._ordering
        # sorted() is stable in both directions; reversing puts None last
        return sorted(matches, key=_null_low_key(field), reverse=not ascending)

    def __len__(self) -> int:
        return len(self._items)
