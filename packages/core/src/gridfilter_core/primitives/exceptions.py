"""Root exception hierarchy for the gridfilter packages."""

from __future__ import annotations

from typing import Any


class GridFilterError(Exception):
    """Root exception for the entire gridfilter toolkit."""


class ValidationError(GridFilterError):
    """Raised when caller-supplied input cannot be accepted.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(self._format(self.errors))

    @staticmethod
    def _format(errors: dict[str, list[str]]) -> str:
        root = errors.get("__root__")
        if root and len(errors) == 1:
            return "; ".join(root)
        return str(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "errors": {key: list(messages) for key, messages in self.errors.items()},
        }


class InfrastructureError(GridFilterError):
    """Base class for all infrastructure-related errors."""


class QuerySourceError(InfrastructureError):
    """Raised by data-source adapters when counting or fetching fails."""


class OperationCancelledError(GridFilterError):
    """Raised when a caller-supplied cancellation signal has been set."""

    def __init__(self, operation: str = "query") -> None:
        self.operation = operation
        super().__init__(f"Operation '{operation}' was cancelled")
