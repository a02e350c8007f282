"""
Compile a specification dictionary (AST) into a SQLAlchemy filter expression.

Uses the strategy pattern: each operator is an isolated class in
``operators/``, registered in a ``SQLAlchemyOperatorRegistry``.
``build_sqla_filter`` walks the AST produced by ``spec.to_dict()`` and
delegates leaf-node compilation to the registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, inspect, not_, or_, true

from gridfilter_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    ValidationError,
)
from gridfilter_specifications.operators import SpecificationOperator

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .strategy import SQLAlchemyOperatorRegistry

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a specification dictionary.

    Args:
        model: The mapped SQLAlchemy model class.
        data: Specification dictionary (JSON AST produced by ``spec.to_dict()``).
        registry: Optional custom operator registry.  Falls back to
            ``DEFAULT_SQLA_REGISTRY``.

    Returns:
        SQLAlchemy Boolean expression.

    Raises:
        FieldNotFoundError: If an attribute is not mapped on the model.
        OperatorNotFoundError: If a leaf uses an operator the registry lacks.
        ValidationError: If a node is structurally invalid.
    """
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(model, data, reg)


# ---------------------------------------------------------------------------
# Internal compilation
# ---------------------------------------------------------------------------


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    op_str = str(data.get("op", "")).lower()

    logical_result = _compile_logical_operator(model, data, registry, op_str)
    if logical_result is not None:
        return logical_result

    return _compile_leaf_node(model, data, registry, op_str)


def _compile_logical_operator(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    op_str: str,
) -> ColumnElement[bool] | None:
    """Compile logical operators (AND, OR, NOT).

    Returns None if not a logical operator.
    """
    if op_str == SpecificationOperator.AND.value:
        conditions = [_compile_node(model, c, registry) for c in _children(data)]
        return and_(*conditions) if conditions else true()

    if op_str == SpecificationOperator.OR.value:
        conditions = [_compile_node(model, c, registry) for c in _children(data)]
        return or_(*conditions) if conditions else false()

    if op_str == SpecificationOperator.NOT.value:
        children = _children(data)
        if len(children) != 1:
            raise ValidationError(
                f"'not' requires exactly one condition, got {len(children)}"
            )
        return not_(_compile_node(model, children[0], registry))

    return None


def _compile_leaf_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    op_str: str,
) -> ColumnElement[bool]:
    """Compile leaf node (attribute-based conditions)."""
    attr: str | None = data.get("attr")
    val = data.get("val")

    if not attr:
        raise ValidationError(f"Specification missing 'attr': {data}")

    column = _mapped_attribute(model, attr)
    return registry.apply(_operator(op_str, registry), column, val)


def _children(data: dict[str, Any]) -> list[dict[str, Any]]:
    conditions = data.get("conditions")
    if conditions is None and "condition" in data:
        return [data["condition"]]
    return list(conditions or [])


def _operator(
    op_str: str, registry: SQLAlchemyOperatorRegistry
) -> SpecificationOperator:
    op: SpecificationOperator | None
    try:
        op = SpecificationOperator(op_str)
    except ValueError:
        op = None
    if op is None or not registry.has(op):
        raise OperatorNotFoundError(
            op_str, [o.value for o in registry.supported_operators]
        )
    return op


def _mapped_attribute(model: type[Any], name: str) -> Any:
    mapper = inspect(model)
    if name not in mapper.all_orm_descriptors:
        raise FieldNotFoundError(name, model.__name__, _column_names(model))
    return getattr(model, name)


def _column_names(model: type[Any]) -> list[str]:
    return [attr.key for attr in inspect(model).column_attrs]
