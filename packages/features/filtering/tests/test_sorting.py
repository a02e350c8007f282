"""Tests for Sorter."""

from __future__ import annotations

import logging

import pytest

from gridfilter_core.domain.schema import RecordSchema
from gridfilter_filtering import Sorter


@pytest.mark.asyncio
class TestSorter:
    async def test_sort_ascending(self, schema, source) -> None:
        ordered = Sorter(schema).sort_by(source, "Age")
        assert [e.Age for e in await ordered.slice(0, 10)] == [25, 30, 35, 40, 50]

    async def test_sort_descending(self, schema, source) -> None:
        ordered = Sorter(schema).sort_by(source, "TimeStamp", ascending=False)
        assert [e.Id for e in await ordered.slice(0, 10)] == [4, 3, 2, 1, 5]

    async def test_nulls_first_ascending_last_descending(self, schema, source) -> None:
        sorter = Sorter(schema)

        ascending = await sorter.sort_by(source, "Source").slice(0, 10)
        descending = await sorter.sort_by(source, "Source", False).slice(0, 10)

        assert [e.Id for e in ascending] == [2, 1, 4, 3, 5]
        assert [e.Id for e in descending] == [5, 3, 1, 4, 2]

    async def test_unknown_field_falls_back_to_default(
        self, schema, source, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="gridfilter.sorting"):
            ordered = Sorter(schema).sort_by(source, "Nope", ascending=False)
            ids = [e.Id for e in await ordered.slice(0, 10)]

        assert ids == [5, 4, 3, 2, 1]
        assert "Nope" in caplog.text

    async def test_explicit_fallback_field(self, schema, source) -> None:
        ordered = Sorter(schema, fallback_field="Age").sort_by(source, None)
        assert [e.Age for e in await ordered.slice(0, 2)] == [25, 30]

    async def test_no_fallback_leaves_source_unsorted(
        self, source, caplog: pytest.LogCaptureFixture
    ) -> None:
        schema = RecordSchema.builder().register_field("Message").build()

        with caplog.at_level(logging.WARNING, logger="gridfilter.sorting"):
            result = Sorter(schema).sort_by(source, "Id")

        assert result is source
        assert "leaving unsorted" in caplog.text


def test_resolve(schema) -> None:
    sorter = Sorter(schema)

    assert sorter.resolve("Message").name == "Message"  # type: ignore[union-attr]
    assert sorter.resolve("message").name == "Id"  # type: ignore[union-attr]


def test_invalid_fallback_rejected(schema) -> None:
    with pytest.raises(ValueError, match="Fallback"):
        Sorter(schema, fallback_field="Missing")
