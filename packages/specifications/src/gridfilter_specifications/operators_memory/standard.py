"""Standard comparison operators: =, !=, >, <, >=, <=."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.EQ

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.NE

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class _OrderingOperator(MemoryOperator):
    """Ordering comparisons are never satisfied by a missing value."""

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None or condition_value is None:
            return False
        return self._compare(field_value, condition_value)

    @abstractmethod
    def _compare(self, left: Any, right: Any) -> bool:
        """Compare two non-null values."""
        ...


class GreaterThanOperator(_OrderingOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.GT

    def _compare(self, left: Any, right: Any) -> bool:
        return bool(left > right)


class LessThanOperator(_OrderingOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.LT

    def _compare(self, left: Any, right: Any) -> bool:
        return bool(left < right)


class GreaterEqualOperator(_OrderingOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.GE

    def _compare(self, left: Any, right: Any) -> bool:
        return bool(left >= right)


class LessEqualOperator(_OrderingOperator):
    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.LE

    def _compare(self, left: Any, right: Any) -> bool:
        return bool(left <= right)
