"""Sorter — orders a data source by a field named at run time."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from gridfilter_core.domain.schema import FieldDescriptor, RecordSchema
    from gridfilter_core.ports.query_source import IQuerySource

logger = logging.getLogger("gridfilter.sorting")

T = TypeVar("T")


class Sorter(Generic[T]):
    """
    Resolves sort field names against a schema and applies the ordering.

    Unknown names never raise: the sorter falls back to *fallback_field*
    (or the schema's default sort field) and, failing that, leaves the
    source unordered. Both cases are logged at WARNING.
    """

    def __init__(
        self,
        schema: RecordSchema[T],
        *,
        fallback_field: str | None = None,
    ) -> None:
        if fallback_field is not None and fallback_field not in schema:
            raise ValueError(
                f"Fallback sort field '{fallback_field}' is not a field of {schema.name}"
            )
        self.schema = schema
        self.fallback_field = fallback_field or schema.default_sort_field

    def resolve(self, property_name: str | None) -> FieldDescriptor | None:
        """Return the field to sort by, applying the fallback rules."""
        if property_name:
            field = self.schema.get(property_name)
            if field is not None:
                return field
        if self.fallback_field is not None:
            logger.warning(
                "Unknown sort field %r on %s, sorting by %r instead",
                property_name,
                self.schema.name,
                self.fallback_field,
            )
            return self.schema.get(self.fallback_field)
        logger.warning(
            "Unknown sort field %r on %s and no fallback, leaving unsorted",
            property_name,
            self.schema.name,
        )
        return None

    def sort_by(
        self,
        source: IQuerySource[T],
        property_name: str | None,
        ascending: bool = True,
    ) -> IQuerySource[T]:
        field = self.resolve(property_name)
        if field is None:
            return source
        return source.order_by(field, ascending=ascending)
