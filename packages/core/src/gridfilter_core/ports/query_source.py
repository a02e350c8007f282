"""IQuerySource — protocol for lazily evaluated, filterable record sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ..domain.schema import FieldDescriptor
    from ..domain.specification import ISpecification

T = TypeVar("T")


@runtime_checkable
class IQuerySource(Protocol[T]):
    """
    A deferred query over records of type ``T``.

    ``where`` and ``order_by`` never touch the data: they return a new
    source describing the narrowed/ordered query. Evaluation happens only
    in ``count`` and ``slice``, which lets database-backed sources push the
    whole query down to the store::

        source = source.where(spec_a).where(spec_b).order_by(field)
        total = await source.count()
        page = await source.slice(offset=20, limit=10)
    """

    def where(self, specification: ISpecification[T]) -> IQuerySource[T]:
        """Return a source additionally filtered by *specification* (AND)."""
        ...

    def order_by(
        self, field: FieldDescriptor, *, ascending: bool = True
    ) -> IQuerySource[T]:
        """Return a source ordered by *field*, replacing any previous ordering."""
        ...

    async def count(self) -> int:
        """Number of records matching every applied filter."""
        ...

    async def slice(self, offset: int, limit: int) -> list[T]:
        """Materialise at most *limit* records starting at *offset*."""
        ...
