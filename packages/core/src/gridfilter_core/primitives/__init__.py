"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    GridFilterError,
    InfrastructureError,
    OperationCancelledError,
    QuerySourceError,
    ValidationError,
)

__all__ = [
    "GridFilterError",
    "InfrastructureError",
    "OperationCancelledError",
    "QuerySourceError",
    "ValidationError",
]
