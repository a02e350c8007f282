"""SQLAlchemy persistence exceptions."""

from __future__ import annotations

from gridfilter_core.primitives.exceptions import QuerySourceError


class SQLAlchemyQueryError(QuerySourceError):
    """Raised when a count or fetch against the database fails."""

    def __init__(self, operation: str, model_name: str, cause: Exception) -> None:
        self.operation = operation
        self.model_name = model_name
        self.cause = cause
        super().__init__(f"Failed to {operation} {model_name} rows: {cause}")
