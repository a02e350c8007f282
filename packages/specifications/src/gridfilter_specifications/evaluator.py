"""
In-memory operator evaluation strategy.

Provides the MemoryOperator protocol and a registry that maps
SpecificationOperator → evaluation strategy.

New operators are added by subclassing MemoryOperator and
registering via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import OperatorNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(
        self,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The actual value resolved from the candidate record.
            condition_value: The value provided in the specification.

        Returns:
            True if the condition is satisfied.
        """
        ...


class MemoryOperatorRegistry:
    """
    Registry of MemoryOperator instances keyed by SpecificationOperator.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualOperator())

        result = registry.evaluate(SpecificationOperator.EQ, actual, expected)
        is_adult = registry.bind(SpecificationOperator.GE, 18)
        is_adult(21)  # True
    """

    def __init__(self) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        """Register multiple operator strategy instances at once."""
        for op in operators:
            self.register(op)

    # -- look-up -------------------------------------------------------------

    def get(self, name: SpecificationOperator) -> MemoryOperator | None:
        """Return the registered operator or ``None``."""
        return self._operators.get(name)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators.keys())

    def require(self, name: SpecificationOperator) -> MemoryOperator:
        """
        Return the registered operator.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise OperatorNotFoundError(
                str(getattr(name, "value", name)),
                [o.value for o in self._operators],
            )
        return op

    # -- evaluation shortcuts ------------------------------------------------

    def evaluate(
        self,
        name: SpecificationOperator,
        field_value: Any,
        condition_value: Any,
    ) -> bool:
        """Look up the operator and evaluate."""
        return self.require(name).evaluate(field_value, condition_value)

    def bind(
        self,
        name: SpecificationOperator,
        condition_value: Any,
    ) -> Callable[[Any], bool]:
        """
        Resolve the operator once and close over the condition value.

        The returned callable maps a field value to the comparison outcome.
        """
        op = self.require(name)

        def predicate(field_value: Any) -> bool:
            return op.evaluate(field_value, condition_value)

        return predicate
