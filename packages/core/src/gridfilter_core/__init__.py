"""gridfilter-core — Foundation package for the filter → query → page toolkit.

Record schemas, the specification protocol, the data-source port and the
in-memory data source. Zero infrastructure dependencies.
"""

from __future__ import annotations

from .adapters.memory import InMemoryQuerySource
from .domain import (
    FieldDescriptor,
    ISpecification,
    RecordSchema,
    RecordSchemaBuilder,
    unwrap_annotation,
)
from .ports import IQuerySource, QueryResult, QueryStatus
from .primitives import (
    GridFilterError,
    InfrastructureError,
    OperationCancelledError,
    QuerySourceError,
    ValidationError,
)

__all__ = [
    # Adapters
    "InMemoryQuerySource",
    # Domain
    "FieldDescriptor",
    "ISpecification",
    "RecordSchema",
    "RecordSchemaBuilder",
    "unwrap_annotation",
    # Ports
    "IQuerySource",
    "QueryResult",
    "QueryStatus",
    # Exceptions
    "GridFilterError",
    "InfrastructureError",
    "OperationCancelledError",
    "QuerySourceError",
    "ValidationError",
]
