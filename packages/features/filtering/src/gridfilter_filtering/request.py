"""PagedQueryRequest — the inbound arguments of a paged grid query."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .filter_spec import FilterSpec


class PagedQueryRequest(BaseModel):
    """
    Filters plus sort and paging parameters, as posted by a grid client.

    Accepts both the camelCase wire names (``filter``, ``sortLabel``,
    ``sortAscending``, ``maxCount``) and the snake_case field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filters: tuple[FilterSpec, ...] = Field(default=(), alias="filter")
    sort_label: str = Field(default="Id", alias="sortLabel")
    sort_ascending: bool = Field(default=True, alias="sortAscending")
    skip: int = 0
    max_count: int = Field(default=100, alias="maxCount")

    @field_validator("filters", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return () if v is None else v

    def active_filters(self) -> list[FilterSpec]:
        return [f for f in self.filters if f.is_active]
