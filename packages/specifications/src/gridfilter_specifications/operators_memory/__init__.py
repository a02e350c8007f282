"""
In-memory operator implementations.

Provides concrete MemoryOperator subclasses for each comparison
SpecificationOperator and a factory function to create registries.

Usage::

    from gridfilter_specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(SpecificationOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .string import ContainsOperator


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators.

    Each call returns a fresh instance, so callers may register extra
    operators without affecting other registries.

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(SpecificationOperator.EQ, "active", "active")
        True
    """
    registry = MemoryOperatorRegistry()
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


__all__ = [
    "ContainsOperator",
    "EqualOperator",
    "GreaterEqualOperator",
    "GreaterThanOperator",
    "LessEqualOperator",
    "LessThanOperator",
    "MemoryOperatorRegistry",
    "NotEqualOperator",
    "build_default_registry",
]
