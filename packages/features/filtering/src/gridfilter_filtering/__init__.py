"""Filter compilation, value parsing, sorting and paged queries."""

from __future__ import annotations

from .compiler import PredicateCompiler
from .exceptions import InvalidFilterError, InvalidFilterReason
from .filter_spec import FilterSpec
from .operators import FilterOperator
from .pagination import PageWindow, page_window
from .parsing import (
    ParserOptions,
    ValueParser,
    parse_duration,
    parse_filter_values,
    parse_single,
    split_values,
)
from .request import PagedQueryRequest
from .service import PagedQueryService
from .sorting import Sorter

__all__ = [
    "FilterOperator",
    "FilterSpec",
    "InvalidFilterError",
    "InvalidFilterReason",
    "PageWindow",
    "PagedQueryRequest",
    "PagedQueryService",
    "ParserOptions",
    "PredicateCompiler",
    "Sorter",
    "ValueParser",
    "page_window",
    "parse_duration",
    "parse_filter_values",
    "parse_single",
    "split_values",
]
