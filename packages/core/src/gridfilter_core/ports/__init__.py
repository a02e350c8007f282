from .query_result import QueryResult, QueryStatus
from .query_source import IQuerySource

__all__ = [
    "IQuerySource",
    "QueryResult",
    "QueryStatus",
]
