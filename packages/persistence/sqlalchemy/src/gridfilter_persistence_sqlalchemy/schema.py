"""Derive a :class:`RecordSchema` from a mapped SQLAlchemy model."""

from __future__ import annotations

import operator
from typing import Any

from sqlalchemy import inspect

from gridfilter_core.domain.schema import FieldDescriptor, RecordSchema


def schema_from_model(
    model: type[Any], *, default_sort_field: str | None = None
) -> RecordSchema[Any]:
    """
    Build a schema with one field per mapped column attribute.

    Field types come from the column type's ``python_type``; types that do
    not declare one are treated as ``object`` (filter text is compared
    as-is). The first primary-key column is the default sort field unless
    *default_sort_field* overrides it.
    """
    mapper = inspect(model)
    fields: list[FieldDescriptor] = []
    primary_keys: list[str] = []

    for attr in mapper.column_attrs:
        column = attr.columns[0]
        fields.append(
            FieldDescriptor(
                name=attr.key,
                field_type=_python_type(column.type),
                getter=operator.attrgetter(attr.key),
                nullable=bool(column.nullable),
            )
        )
        if column.primary_key:
            primary_keys.append(attr.key)

    return RecordSchema(
        fields,
        record_type=model,
        default_sort_field=default_sort_field
        or (primary_keys[0] if primary_keys else None),
    )


def _python_type(column_type: Any) -> type[Any]:
    try:
        python_type = column_type.python_type
    except NotImplementedError:
        return object
    return python_type if isinstance(python_type, type) else object
