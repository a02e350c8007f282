"""Specification pattern primitives."""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol[T]):
    """
    Protocol for the Specification pattern.
    Used to encapsulate a filter condition over a single record type.
    """

    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if the record satisfies the specification.
        Used for in-memory filtering.
        """
        ...

    def to_dict(self) -> dict[str, Any]:
        """
        Return a dictionary representation of the specification.
        Data-source adapters translate this tree into their native query form.
        """
        ...
