"""FilterOperator — the ten user-facing filter operators and their wire forms."""

from __future__ import annotations

from enum import Enum
from typing import Any


class FilterOperator(str, Enum):
    """Comparison requested by a single filter condition."""

    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    LIKE = "Like"
    NOT_LIKE = "NotLike"
    ANY = "Any"
    NOT_ANY = "NotAny"
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"

    @property
    def symbol(self) -> str:
        """Short symbolic notation used by grid UIs and query strings."""
        return _SYMBOLS[self.value]

    @property
    def is_multi_value(self) -> bool:
        """True when the raw value is a separated list (Any / NotAny)."""
        return self.value in _MULTI_VALUE

    @classmethod
    def parse(cls, raw: Any) -> FilterOperator:
        """
        Resolve an operator from its enum member, name, symbol or alias.

        Unrecognised input resolves to :attr:`EQUALS`.
        """
        if isinstance(raw, FilterOperator):
            return raw
        if not isinstance(raw, str):
            return cls.EQUALS
        text = raw.strip()
        if text in _BY_SYMBOL:
            return cls(_BY_SYMBOL[text])
        return cls(_ALIASES.get(text.lower(), cls.EQUALS.value))


_SYMBOLS: dict[str, str] = {
    "Equals": "=",
    "NotEquals": "≠",
    "Like": "≈",
    "NotLike": "!≈",
    "Any": ",",
    "NotAny": "!,",
    "GreaterThan": ">",
    "LessThan": "<",
    "GreaterThanOrEqual": "≥",
    "LessThanOrEqual": "≤",
}
_BY_SYMBOL: dict[str, str] = {symbol: name for name, symbol in _SYMBOLS.items()}
_MULTI_VALUE: frozenset[str] = frozenset({"Any", "NotAny"})

# Case-insensitive names plus ASCII spellings for clients without the symbols
_ALIASES: dict[str, str] = {
    **{name.lower(): name for name in _SYMBOLS},
    **{member.name.lower(): member.value for member in FilterOperator},
    "eq": "Equals",
    "==": "Equals",
    "ne": "NotEquals",
    "!=": "NotEquals",
    "<>": "NotEquals",
    "like": "Like",
    "contains": "Like",
    "not_like": "NotLike",
    "notlike": "NotLike",
    "any": "Any",
    "in": "Any",
    "not_any": "NotAny",
    "notany": "NotAny",
    "not_in": "NotAny",
    "gt": "GreaterThan",
    "lt": "LessThan",
    ">=": "GreaterThanOrEqual",
    "gte": "GreaterThanOrEqual",
    "ge": "GreaterThanOrEqual",
    "<=": "LessThanOrEqual",
    "lte": "LessThanOrEqual",
    "le": "LessThanOrEqual",
}
