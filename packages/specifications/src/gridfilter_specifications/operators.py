from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators understood by the specification AST."""

    # Standard comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # String operations
    CONTAINS = "contains"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"
