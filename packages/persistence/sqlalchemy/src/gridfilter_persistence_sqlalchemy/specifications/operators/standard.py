"""Standard comparison operators for SQLAlchemy."""

from __future__ import annotations

import operator as op_module
from typing import TYPE_CHECKING, Any, cast

from gridfilter_specifications.operators import SpecificationOperator

from ..strategy import SQLAlchemyOperator

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement


class _BinaryOperator(SQLAlchemyOperator):
    """Maps a specification comparator onto the matching Python operator."""

    _operator: SpecificationOperator
    _compare: Callable[[Any, Any], Any]

    @property
    def name(self) -> SpecificationOperator:
        return self._operator

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", type(self)._compare(column, value))


class EqualOperator(_BinaryOperator):
    _operator = SpecificationOperator.EQ
    _compare = staticmethod(op_module.eq)


class NotEqualOperator(_BinaryOperator):
    _operator = SpecificationOperator.NE
    _compare = staticmethod(op_module.ne)


class GreaterThanOperator(_BinaryOperator):
    _operator = SpecificationOperator.GT
    _compare = staticmethod(op_module.gt)


class LessThanOperator(_BinaryOperator):
    _operator = SpecificationOperator.LT
    _compare = staticmethod(op_module.lt)


class GreaterEqualOperator(_BinaryOperator):
    _operator = SpecificationOperator.GE
    _compare = staticmethod(op_module.ge)


class LessEqualOperator(_BinaryOperator):
    _operator = SpecificationOperator.LE
    _compare = staticmethod(op_module.le)
