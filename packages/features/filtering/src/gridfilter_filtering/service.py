"""
PagedQueryService — filter, sort, count and page a data source.

Every failure inside a query degrades to an empty page: the service logs
the error and returns a :class:`QueryResult` whose ``status`` says whether
the page is empty because nothing matched, because something failed, or
because the caller cancelled.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from gridfilter_core.domain.schema import RecordSchema
from gridfilter_core.ports.query_result import QueryResult
from gridfilter_core.primitives.exceptions import OperationCancelledError

from .compiler import PredicateCompiler
from .pagination import page_window
from .parsing import ValueParser
from .sorting import Sorter

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Iterable

    from gridfilter_core.ports.query_source import IQuerySource

    from .filter_spec import FilterSpec
    from .request import PagedQueryRequest

logger = logging.getLogger("gridfilter.service")

T = TypeVar("T")


class PagedQueryService(Generic[T]):
    """
    Runs paged queries over one data source.

    Args:
        source: The unfiltered data source.
        schema_or_type: Record schema, or a record type to derive one from.
        compiler: Filter compiler; built from the schema when omitted.
        sorter: Sort-field resolver; built from the schema when omitted.
        parser: Value parser shared with the default compiler. Its clock
            provides the per-query "now" for relative dates.
    """

    def __init__(
        self,
        source: IQuerySource[T],
        schema_or_type: RecordSchema[T] | type[T],
        *,
        compiler: PredicateCompiler[T] | None = None,
        sorter: Sorter[T] | None = None,
        parser: ValueParser | None = None,
    ) -> None:
        self.schema: RecordSchema[T] = (
            schema_or_type
            if isinstance(schema_or_type, RecordSchema)
            else RecordSchema.from_type(schema_or_type)
        )
        self._source = source
        self._parser = parser or ValueParser()
        self._compiler = compiler or PredicateCompiler(self.schema, parser=self._parser)
        self._sorter = sorter or Sorter(self.schema)

    async def get_filtered_values(
        self,
        filters: Iterable[FilterSpec],
        sort_property: str = "Id",
        sort_ascending: bool = True,
        skip: int = 0,
        max_count: int = 100,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> QueryResult[T]:
        """
        Return the total number of matches and the requested page.

        Never raises for bad input or data-source failures; see the module
        docstring. Task cancellation (``asyncio.CancelledError``) propagates.
        """
        try:
            return await self._run(
                filters,
                sort_property,
                sort_ascending,
                skip,
                max_count,
                cancel_event,
            )
        except OperationCancelledError:
            logger.info("Paged query on %s cancelled", self.schema.name)
            return QueryResult.cancelled()
        except Exception as exc:
            logger.exception("Paged query on %s failed", self.schema.name)
            return QueryResult.failed(str(exc))

    async def execute(
        self,
        request: PagedQueryRequest,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> QueryResult[T]:
        return await self.get_filtered_values(
            request.filters,
            request.sort_label,
            request.sort_ascending,
            request.skip,
            request.max_count,
            cancel_event=cancel_event,
        )

    async def _run(
        self,
        filters: Iterable[FilterSpec],
        sort_property: str,
        sort_ascending: bool,
        skip: int,
        max_count: int,
        cancel_event: asyncio.Event | None,
    ) -> QueryResult[T]:
        _raise_if_cancelled(cancel_event, "compile")
        now = self._parser.options.clock()

        query = self._source
        for filter_spec in filters:
            if not filter_spec.is_active:
                continue
            query = query.where(self._compiler.compile(filter_spec, now=now))
        query = self._sorter.sort_by(query, sort_property, sort_ascending)

        _raise_if_cancelled(cancel_event, "count")
        total_count = await query.count()

        window = page_window(total_count, skip, max_count)
        items: list[T] = []
        if total_count > 0 and not window.is_empty:
            _raise_if_cancelled(cancel_event, "fetch")
            items = await query.slice(window.offset, window.limit)

        logger.debug(
            "Paged query on %s: %d matches, returning %d from offset %d",
            self.schema.name,
            total_count,
            len(items),
            window.offset,
        )
        return QueryResult(total_count=total_count, items=items)


def _raise_if_cancelled(cancel_event: asyncio.Event | None, stage: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(stage)
