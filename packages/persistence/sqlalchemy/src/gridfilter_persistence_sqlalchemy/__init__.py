"""SQLAlchemy push-down adapter for gridfilter queries."""

from __future__ import annotations

from .exceptions import SQLAlchemyQueryError
from .query_source import SQLAlchemyQuerySource
from .schema import schema_from_model
from .specifications import (
    DEFAULT_SQLA_REGISTRY,
    SQLAlchemyOperator,
    SQLAlchemyOperatorRegistry,
    build_default_sqla_registry,
    build_sqla_filter,
)

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "SQLAlchemyOperator",
    "SQLAlchemyOperatorRegistry",
    "SQLAlchemyQueryError",
    "SQLAlchemyQuerySource",
    "build_default_sqla_registry",
    "build_sqla_filter",
    "schema_from_model",
]
