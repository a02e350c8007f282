"""
SQLAlchemyQuerySource — ``IQuerySource`` that pushes filters, ordering and
paging down to the database.

Usage::

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    source = SQLAlchemyQuerySource(session_factory, LogEntryModel)
    service = PagedQueryService(source, schema_from_model(LogEntryModel))
    result = await service.get_filtered_values(filters, "TimeStamp", False)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from gridfilter_core.ports.query_source import IQuerySource

from .exceptions import SQLAlchemyQueryError
from .specifications.compiler import build_sqla_filter

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from gridfilter_core.domain.schema import FieldDescriptor
    from gridfilter_core.domain.specification import ISpecification

    from .specifications.strategy import SQLAlchemyOperatorRegistry

T = TypeVar("T")

logger = logging.getLogger("gridfilter.persistence.sqlalchemy")


class SQLAlchemyQuerySource(IQuerySource[T], Generic[T]):
    """
    Deferred query over a mapped model.

    ``where`` compiles the specification immediately, so unknown fields or
    unsupported operators fail while the query is being built, not when it
    runs. ``count`` and ``slice`` each open a short-lived session from the
    factory.

    Ordering adds the primary-key columns as tie-breakers so paging is
    deterministic. With ``explicit_null_ordering`` NULLs are placed first
    when ascending and last when descending, matching the in-memory
    source on engines whose default differs.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[T],
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
        explicit_null_ordering: bool = False,
        _criteria: tuple[ColumnElement[bool], ...] = (),
        _ordering: tuple[Any, ...] = (),
    ) -> None:
        self.session_factory = session_factory
        self.model = model
        self.registry = registry
        self.explicit_null_ordering = explicit_null_ordering
        self._criteria = _criteria
        self._ordering = _ordering

    def where(self, specification: ISpecification[T]) -> SQLAlchemyQuerySource[T]:
        clause = build_sqla_filter(
            self.model, specification.to_dict(), registry=self.registry
        )
        return self._copy(criteria=(*self._criteria, clause))

    def order_by(
        self, field: FieldDescriptor, *, ascending: bool = True
    ) -> SQLAlchemyQuerySource[T]:
        column = getattr(self.model, field.name)
        clause = column.asc() if ascending else column.desc()
        if self.explicit_null_ordering:
            clause = clause.nulls_first() if ascending else clause.nulls_last()
        # ascending tie-breakers keep equal keys in insertion order both ways
        tie_breakers = [
            pk.asc()
            for pk in inspect(self.model).primary_key
            if pk.key != field.name
        ]
        return self._copy(ordering=(clause, *tie_breakers))

    async def count(self) -> int:
        stmt = select(func.count()).select_from(self._statement().subquery())
        try:
            async with self.session_factory() as session:
                total = (await session.execute(stmt)).scalar_one()
        except SQLAlchemyError as exc:
            raise SQLAlchemyQueryError("count", self.model.__name__, exc) from exc
        logger.debug("Counted %d %s rows", total, self.model.__name__)
        return int(total)

    async def slice(self, offset: int, limit: int) -> list[T]:
        if limit <= 0:
            return []
        stmt = self._statement().offset(max(0, offset)).limit(limit)
        try:
            async with self.session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise SQLAlchemyQueryError("fetch", self.model.__name__, exc) from exc
        logger.debug(
            "Fetched %d %s rows (offset=%d, limit=%d)",
            len(rows),
            self.model.__name__,
            offset,
            limit,
        )
        return list(rows)

    # ── Internals ────────────────────────────────────────────────

    def _statement(self) -> Select[Any]:
        stmt = select(self.model)
        if self._criteria:
            stmt = stmt.where(*self._criteria)
        if self._ordering:
            stmt = stmt.order_by(*self._ordering)
        return stmt

    def _copy(
        self,
        *,
        criteria: tuple[ColumnElement[bool], ...] | None = None,
        ordering: tuple[Any, ...] | None = None,
    ) -> SQLAlchemyQuerySource[T]:
        return SQLAlchemyQuerySource(
            self.session_factory,
            self.model,
            registry=self.registry,
            explicit_null_ordering=self.explicit_null_ordering,
            _criteria=self._criteria if criteria is None else criteria,
            _ordering=self._ordering if ordering is None else ordering,
        )
