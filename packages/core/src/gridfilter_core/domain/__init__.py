"""Domain primitives: record schemas and the specification protocol."""

from __future__ import annotations

from .schema import FieldDescriptor, RecordSchema, RecordSchemaBuilder, unwrap_annotation
from .specification import ISpecification

__all__ = [
    "FieldDescriptor",
    "ISpecification",
    "RecordSchema",
    "RecordSchemaBuilder",
    "unwrap_annotation",
]
