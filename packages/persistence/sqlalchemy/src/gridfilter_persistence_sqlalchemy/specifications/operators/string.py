"""String operators for SQLAlchemy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from gridfilter_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


class ContainsOperator(SQLAlchemyOperator):
    """``LIKE '%value%'`` with ``%`` and ``_`` in the value matched literally.

    Case sensitivity follows the column collation of the engine.
    """

    @property
    def name(self) -> SpecificationOperator:
        return SpecificationOperator.CONTAINS

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", column.contains(value, autoescape=True))
