"""Page-window arithmetic for skip/take paging."""

from __future__ import annotations

from typing import NamedTuple


class PageWindow(NamedTuple):
    offset: int
    limit: int

    @property
    def is_empty(self) -> bool:
        return self.limit <= 0


def page_window(total_count: int, skip: int, max_count: int) -> PageWindow:
    """
    Clamp a requested page to the matching records.

    A negative *skip* starts at the first record. The limit never exceeds
    *max_count* nor the records left after *skip*, and is never negative.

    >>> page_window(5, 0, 2)
    PageWindow(offset=0, limit=2)
    >>> page_window(3, 10, 5)
    PageWindow(offset=10, limit=0)
    """
    offset = max(0, skip)
    limit = max(0, min(total_count - offset, max_count))
    return PageWindow(offset=offset, limit=limit)
