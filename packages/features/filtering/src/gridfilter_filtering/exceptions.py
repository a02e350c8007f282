"""Filtering package exceptions."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from gridfilter_core.primitives.exceptions import ValidationError

if TYPE_CHECKING:
    from .filter_spec import FilterSpec


class InvalidFilterReason(str, Enum):
    """Why a filter could not be compiled."""

    UNKNOWN_PROPERTY = "unknown_property"
    NO_USABLE_VALUE = "no_usable_value"
    UNSUPPORTED_OPERATOR = "unsupported_operator"


class InvalidFilterError(ValidationError):
    """Raised when a filter names an unknown field, has no parsable value,
    or uses an operator its field type does not support."""

    def __init__(
        self,
        message: str,
        *,
        reason: InvalidFilterReason,
        filter_spec: FilterSpec | None = None,
    ) -> None:
        self.reason = reason
        self.filter_spec = filter_spec
        field = filter_spec.property_name if filter_spec is not None else "__root__"
        super().__init__({field: [message]})
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["reason"] = self.reason.value
        if self.filter_spec is not None:
            payload["filter"] = self.filter_spec.model_dump(by_alias=True, mode="json")
        return payload
