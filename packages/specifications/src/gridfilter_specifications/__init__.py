from .ast import AttributeSpecification
from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)
from .operators import SpecificationOperator
from .operators_memory import build_default_registry

__all__ = [
    # Core types
    "SpecificationOperator",
    "AttributeSpecification",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
]
