"""Tests for PagedQueryService over the in-memory data source."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any

import pytest

from gridfilter_core.adapters.memory import InMemoryQuerySource
from gridfilter_core.ports.query_result import QueryStatus
from gridfilter_core.primitives.exceptions import QuerySourceError
from gridfilter_filtering import (
    FilterSpec,
    PagedQueryRequest,
    PagedQueryService,
    ParserOptions,
    ValueParser,
)


class BrokenSource(InMemoryQuerySource[Any]):
    """Data source whose count fails with the configured exception."""

    def __init__(self, error: BaseException) -> None:
        super().__init__(())
        self.error = error

    def where(self, specification: Any) -> BrokenSource:
        return self

    def order_by(self, field: Any, *, ascending: bool = True) -> BrokenSource:
        return self

    async def count(self) -> int:
        raise self.error


@pytest.fixture
def service(source, schema, parser) -> PagedQueryService:
    return PagedQueryService(source, schema, parser=parser)


@pytest.mark.asyncio
class TestGetFilteredValues:
    async def test_no_filters_first_page(self, service) -> None:
        result = await service.get_filtered_values([], "Id", True, 0, 2)

        assert result.status is QueryStatus.OK
        assert result.total_count == 5
        assert [e.Id for e in result.items] == [1, 2]

    async def test_defaults(self, service) -> None:
        result = await service.get_filtered_values([])

        assert result.total_count == 5
        assert [e.Id for e in result.items] == [1, 2, 3, 4, 5]

    async def test_skip_past_the_end(self, service) -> None:
        filters = [FilterSpec(property="Age", operator=">", value="30")]

        result = await service.get_filtered_values(filters, skip=10, max_count=5)

        assert result.total_count == 3
        assert result.items == []

    async def test_last_partial_page(self, service) -> None:
        result = await service.get_filtered_values([], "Id", True, 4, 2)

        assert result.total_count == 5
        assert [e.Id for e in result.items] == [5]

    async def test_negative_skip_starts_at_zero(self, service) -> None:
        result = await service.get_filtered_values([], skip=-5, max_count=1)
        assert [e.Id for e in result.items] == [1]

    async def test_filters_are_conjunctive(self, service) -> None:
        filters = [
            FilterSpec(property="Message", operator="≈", value="foo"),
            FilterSpec(property="Age", operator="≥", value="35"),
        ]

        result = await service.get_filtered_values(filters)

        assert result.total_count == 1
        assert [e.Id for e in result.items] == [3]

    async def test_inactive_filters_are_ignored(self, service) -> None:
        filters = [
            FilterSpec(property="Age", value=""),
            FilterSpec(property="DoesNotExist", value=None),
        ]

        result = await service.get_filtered_values(filters)

        assert result.total_count == 5

    async def test_sort_descending(self, service) -> None:
        result = await service.get_filtered_values([], "Age", False, 0, 3)
        assert [e.Age for e in result.items] == [50, 40, 35]

    async def test_unknown_sort_property_falls_back(
        self, service, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="gridfilter.sorting"):
            result = await service.get_filtered_values([], "Bogus", False, 0, 2)

        assert result.status is QueryStatus.OK
        assert [e.Id for e in result.items] == [5, 4]
        assert "Bogus" in caplog.text

    async def test_relative_date_filter(self, service) -> None:
        filters = [FilterSpec(property="TimeStamp", operator="≥", value="-1")]

        result = await service.get_filtered_values(filters, "TimeStamp", False)

        assert result.total_count == 2
        assert [e.Id for e in result.items] == [4, 3]

    async def test_relative_filter_in_hours_past_a_day(self, service) -> None:
        filters = [FilterSpec(property="TimeStamp", operator="≥", value="-24:00:00")]

        result = await service.get_filtered_values(filters, "TimeStamp", True)

        assert result.status is QueryStatus.OK
        assert [e.Id for e in result.items] == [3, 4]

    async def test_relative_filters_share_one_clock_reading(
        self, source, schema, now: datetime
    ) -> None:
        readings: list[datetime] = []

        def clock() -> datetime:
            # each reading is an hour later than the one before
            readings.append(now + timedelta(hours=len(readings)))
            return readings[-1]

        service = PagedQueryService(
            source, schema, parser=ValueParser(ParserOptions(clock=clock))
        )
        filters = [
            FilterSpec(property="TimeStamp", operator="≥", value="-1"),
            FilterSpec(property="TimeStamp", operator="<", value="-01:00"),
        ]

        result = await service.get_filtered_values(filters, "Id", True)

        assert len(readings) == 1
        assert [e.Id for e in result.items] == [3]

    async def test_sort_by_enum_follows_member_order(self, service) -> None:
        result = await service.get_filtered_values([], "Level", True)
        assert [e.Id for e in result.items] == [3, 1, 4, 2, 5]

        result = await service.get_filtered_values([], "Level", False)
        assert [e.Id for e in result.items] == [2, 5, 1, 4, 3]

    async def test_invalid_filter_yields_failed_empty_page(
        self, service, caplog: pytest.LogCaptureFixture
    ) -> None:
        filters = [
            FilterSpec(property="Age", operator=">", value="30"),
            FilterSpec(property="Nope", value="x"),
        ]

        with caplog.at_level(logging.ERROR, logger="gridfilter.service"):
            result = await service.get_filtered_values(filters)

        assert result.status is QueryStatus.FAILED
        assert result.total_count == 0
        assert result.items == []
        assert "Nope" in (result.error or "")
        assert any(r.exc_info for r in caplog.records)

    async def test_like_on_number_yields_failed_page(self, service) -> None:
        result = await service.get_filtered_values(
            [FilterSpec(property="Age", operator="≈", value="3")]
        )
        assert result.status is QueryStatus.FAILED
        assert result.total_count == 0

    async def test_data_source_error_yields_failed_page(self, schema) -> None:
        service = PagedQueryService(BrokenSource(QuerySourceError("db down")), schema)

        result = await service.get_filtered_values([])

        assert result.status is QueryStatus.FAILED
        assert result.error == "db down"

    async def test_cancel_event(self, service) -> None:
        cancel = asyncio.Event()
        cancel.set()

        result = await service.get_filtered_values([], cancel_event=cancel)

        assert result.status is QueryStatus.CANCELLED
        assert result.total_count == 0
        assert result.items == []

    async def test_unset_cancel_event_is_ignored(self, service) -> None:
        result = await service.get_filtered_values([], cancel_event=asyncio.Event())
        assert result.total_count == 5

    async def test_task_cancellation_propagates(self, schema) -> None:
        service = PagedQueryService(BrokenSource(asyncio.CancelledError()), schema)

        with pytest.raises(asyncio.CancelledError):
            await service.get_filtered_values([])

    async def test_result_items_never_exceed_max_count(self, service) -> None:
        for max_count in range(0, 7):
            result = await service.get_filtered_values([], max_count=max_count)
            assert len(result.items) <= max_count
            assert result.total_count == 5


@pytest.mark.asyncio
class TestExecute:
    async def test_execute_request(self, service) -> None:
        request = PagedQueryRequest.model_validate(
            {
                "filter": [{"property": "Level", "operator": ",", "value": "info,debug"}],
                "sortLabel": "Age",
                "sortAscending": False,
                "maxCount": 2,
            }
        )

        result = await service.execute(request)

        assert result.total_count == 3
        assert [e.Id for e in result.items] == [3, 4]


@pytest.mark.asyncio
async def test_schema_derived_from_record_type(entries) -> None:
    service = PagedQueryService(InMemoryQuerySource(entries), type(entries[0]))

    result = await service.get_filtered_values(
        [FilterSpec(property="Source", operator="!,", value="api")]
    )

    assert [e.Id for e in result.items] == [2, 3, 5]
