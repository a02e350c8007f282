"""Leaf specification: one field compared against one typed value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from .base import BaseSpecification
from .exceptions import OperatorNotFoundError
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Callable

    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

_LOGICAL_OPERATORS: frozenset[str] = frozenset(
    m.value
    for m in (
        SpecificationOperator.AND,
        SpecificationOperator.OR,
        SpecificationOperator.NOT,
    )
)
_COMPARISON_OPERATORS: frozenset[str] = frozenset(
    m.value for m in SpecificationOperator if m.value not in _LOGICAL_OPERATORS
)


class AttributeSpecification(BaseSpecification[T]):
    """
    Specification that compares a single field value.

    Delegates in-memory evaluation to a :class:`MemoryOperatorRegistry`
    (strategy pattern). The operator strategy is bound when the
    specification is built, so an operator the registry does not know
    fails at construction rather than on the first record.

    Args:
        attr: Field name. Dotted paths (``address.city``) are resolved
            through attributes or mapping keys when no *accessor* is given.
        op: Comparison operator.
        val: Typed condition value.
        registry: Required in-memory operator registry.
        accessor: Optional value extractor used instead of path resolution.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
        *,
        registry: MemoryOperatorRegistry,
        accessor: Callable[[Any], Any] | None = None,
    ) -> None:
        if registry is None:
            raise ValueError(
                "registry parameter is required. "
                "Use build_default_registry() from operators_memory to create one."
            )
        self.attr = attr
        self.op = _coerce_operator(op)
        self.val = val
        self._accessor = accessor
        self._predicate = registry.bind(self.op, val)

    def is_satisfied_by(self, candidate: T) -> bool:
        if self._accessor is not None:
            actual_val = self._accessor(candidate)
        else:
            actual_val = self._resolve_field(candidate, self.attr)
        return self._predicate(actual_val)

    # -- field resolution ----------------------------------------------------

    @staticmethod
    def _resolve_field(obj: Any, attr_path: str) -> Any:
        """Resolve a dot-separated path through attributes or mapping keys."""
        for part in attr_path.split("."):
            if obj is None:
                return None
            obj = obj.get(part) if isinstance(obj, Mapping) else getattr(obj, part, None)
        return obj

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r} {self.op.value} {self.val!r})"


def _coerce_operator(op: SpecificationOperator | str) -> SpecificationOperator:
    if isinstance(op, SpecificationOperator):
        return op
    try:
        return SpecificationOperator(op.lower())
    except ValueError:
        raise OperatorNotFoundError(op, sorted(_COMPARISON_OPERATORS)) from None
