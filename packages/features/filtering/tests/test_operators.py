"""Tests for FilterOperator symbols and parsing."""

from __future__ import annotations

import pytest

from gridfilter_filtering.operators import FilterOperator


@pytest.mark.parametrize(
    ("operator", "symbol"),
    [
        (FilterOperator.EQUALS, "="),
        (FilterOperator.NOT_EQUALS, "≠"),
        (FilterOperator.LIKE, "≈"),
        (FilterOperator.NOT_LIKE, "!≈"),
        (FilterOperator.ANY, ","),
        (FilterOperator.NOT_ANY, "!,"),
        (FilterOperator.GREATER_THAN, ">"),
        (FilterOperator.LESS_THAN, "<"),
        (FilterOperator.GREATER_THAN_OR_EQUAL, "≥"),
        (FilterOperator.LESS_THAN_OR_EQUAL, "≤"),
    ],
)
def test_symbol_table_round_trips(operator: FilterOperator, symbol: str) -> None:
    assert operator.symbol == symbol
    assert FilterOperator.parse(symbol) is operator


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("NotEquals", FilterOperator.NOT_EQUALS),
        ("notequals", FilterOperator.NOT_EQUALS),
        ("GREATER_THAN_OR_EQUAL", FilterOperator.GREATER_THAN_OR_EQUAL),
        ("!=", FilterOperator.NOT_EQUALS),
        ("gte", FilterOperator.GREATER_THAN_OR_EQUAL),
        ("<=", FilterOperator.LESS_THAN_OR_EQUAL),
        ("in", FilterOperator.ANY),
        ("not_in", FilterOperator.NOT_ANY),
        ("like", FilterOperator.LIKE),
        ("not_like", FilterOperator.NOT_LIKE),
        ("  >  ", FilterOperator.GREATER_THAN),
    ],
)
def test_parse_names_and_aliases(raw: str, expected: FilterOperator) -> None:
    assert FilterOperator.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", "bogus", "~", None, 42])
def test_unrecognised_defaults_to_equals(raw: object) -> None:
    assert FilterOperator.parse(raw) is FilterOperator.EQUALS


def test_parse_passes_members_through() -> None:
    assert FilterOperator.parse(FilterOperator.LIKE) is FilterOperator.LIKE


def test_multi_value_operators() -> None:
    assert {op for op in FilterOperator if op.is_multi_value} == {
        FilterOperator.ANY,
        FilterOperator.NOT_ANY,
    }
