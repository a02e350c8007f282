"""
PredicateCompiler — FilterSpec → specification AST over a record type.

The produced nodes evaluate in memory through ``is_satisfied_by`` and
translate to SQL through ``to_dict()``, so one compiled filter serves both
data-source kinds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from gridfilter_core.domain.schema import RecordSchema
from gridfilter_specifications import (
    AndSpecification,
    AttributeSpecification,
    FieldNotFoundError,
    NotSpecification,
    OrSpecification,
    SpecificationOperator,
    build_default_registry,
)

from .exceptions import InvalidFilterError, InvalidFilterReason
from .operators import FilterOperator
from .parsing import ValueParser

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from gridfilter_core.domain.schema import FieldDescriptor
    from gridfilter_core.domain.specification import ISpecification
    from gridfilter_specifications import MemoryOperatorRegistry

    from .filter_spec import FilterSpec

logger = logging.getLogger("gridfilter.compiler")

T = TypeVar("T")

_COMPARATORS: dict[str, SpecificationOperator] = {
    FilterOperator.EQUALS.value: SpecificationOperator.EQ,
    FilterOperator.NOT_EQUALS.value: SpecificationOperator.NE,
    FilterOperator.GREATER_THAN.value: SpecificationOperator.GT,
    FilterOperator.LESS_THAN.value: SpecificationOperator.LT,
    FilterOperator.GREATER_THAN_OR_EQUAL.value: SpecificationOperator.GE,
    FilterOperator.LESS_THAN_OR_EQUAL.value: SpecificationOperator.LE,
}


class PredicateCompiler(Generic[T]):
    """
    Validates filters against a :class:`RecordSchema` and compiles them.

    Args:
        schema_or_type: The record schema, or a record type to derive one from.
        registry: In-memory operator registry bound into every leaf.
        parser: Value parser (and its formatting profile).
    """

    def __init__(
        self,
        schema_or_type: RecordSchema[T] | type[T],
        *,
        registry: MemoryOperatorRegistry | None = None,
        parser: ValueParser | None = None,
    ) -> None:
        self.schema: RecordSchema[T] = (
            schema_or_type
            if isinstance(schema_or_type, RecordSchema)
            else RecordSchema.from_type(schema_or_type)
        )
        self._registry = registry or build_default_registry()
        self._parser = parser or ValueParser()

    @property
    def field_names(self) -> list[str]:
        return self.schema.field_names

    def compile(
        self,
        filter_spec: FilterSpec,
        *,
        now: datetime | None = None,
    ) -> ISpecification[T]:
        """
        Compile one filter.

        Raises:
            InvalidFilterError: unknown field, no parsable value, or ``Like``
                on a non-text field.
        """
        field = self._resolve_field(filter_spec)
        operator = filter_spec.operator

        values = self._parser.parse_filter_values(
            field.field_type, operator, filter_spec.value, now=now
        )
        if not values:
            raise InvalidFilterError(
                f"Value {filter_spec.value!r} is not a valid "
                f"{field.field_type.__name__} for field '{field.name}'",
                reason=InvalidFilterReason.NO_USABLE_VALUE,
                filter_spec=filter_spec,
            )

        if operator is FilterOperator.LIKE or operator is FilterOperator.NOT_LIKE:
            if not field.is_string:
                raise InvalidFilterError(
                    f"Operator {operator.value} requires a text field; "
                    f"'{field.name}' is {field.field_type.__name__}",
                    reason=InvalidFilterReason.UNSUPPORTED_OPERATOR,
                    filter_spec=filter_spec,
                )
            contains = self._leaf(field, SpecificationOperator.CONTAINS, values[0])
            if operator is FilterOperator.NOT_LIKE:
                return NotSpecification(contains)
            return contains

        if operator.is_multi_value:
            any_of: OrSpecification[T] = OrSpecification(
                *(self._leaf(field, SpecificationOperator.EQ, v) for v in values)
            )
            if operator is FilterOperator.NOT_ANY:
                return NotSpecification(any_of)
            return any_of

        comparator = _COMPARATORS.get(operator.value, SpecificationOperator.EQ)
        return self._leaf(field, comparator, values[0])

    def compile_all(
        self,
        filters: Iterable[FilterSpec],
        *,
        now: datetime | None = None,
    ) -> ISpecification[T] | None:
        """
        Compile the active filters and AND them together.

        Returns ``None`` when no filter is active. All filters see the same
        *now*, captured once when not supplied.
        """
        active = [f for f in filters if f.is_active]
        if not active:
            return None
        if now is None:
            now = self._parser.options.clock()
        specs = [self.compile(f, now=now) for f in active]
        if len(specs) == 1:
            return specs[0]
        return AndSpecification(*specs)

    # -- internals -----------------------------------------------------------

    def _resolve_field(self, filter_spec: FilterSpec) -> FieldDescriptor:
        field = self.schema.get(filter_spec.property_name)
        if field is not None:
            return field
        hint = FieldNotFoundError(
            filter_spec.property_name, self.schema.name, self.schema.field_names
        )
        logger.debug("Rejected filter %s: unknown field", filter_spec)
        raise InvalidFilterError(
            str(hint),
            reason=InvalidFilterReason.UNKNOWN_PROPERTY,
            filter_spec=filter_spec,
        ) from hint

    def _leaf(
        self,
        field: FieldDescriptor,
        op: SpecificationOperator,
        value: Any,
    ) -> AttributeSpecification[T]:
        return AttributeSpecification(
            field.name,
            op,
            value,
            registry=self._registry,
            accessor=field.getter,
        )
