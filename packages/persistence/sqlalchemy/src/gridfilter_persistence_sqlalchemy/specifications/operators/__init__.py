"""
SQLAlchemy operator implementations and default registry.

Usage::

    from gridfilter_persistence_sqlalchemy.specifications.operators import (
        DEFAULT_SQLA_REGISTRY,
    )

    expr = DEFAULT_SQLA_REGISTRY.apply(SpecificationOperator.EQ, column, value)
"""

from __future__ import annotations

from ..strategy import SQLAlchemyOperatorRegistry
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import ContainsOperator


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    """Create a registry with all built-in SQLAlchemy operators."""
    registry = SQLAlchemyOperatorRegistry()
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        LessThanOperator(),
        GreaterEqualOperator(),
        LessEqualOperator(),
        # String
        ContainsOperator(),
    )
    return registry


DEFAULT_SQLA_REGISTRY = build_default_sqla_registry()

__all__ = [
    "DEFAULT_SQLA_REGISTRY",
    "ContainsOperator",
    "EqualOperator",
    "GreaterEqualOperator",
    "GreaterThanOperator",
    "LessEqualOperator",
    "LessThanOperator",
    "NotEqualOperator",
    "build_default_sqla_registry",
]
