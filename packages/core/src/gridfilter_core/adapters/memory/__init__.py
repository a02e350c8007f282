from .query_source import InMemoryQuerySource

__all__ = [
    "InMemoryQuerySource",
]
