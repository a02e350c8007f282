"""Shared fixtures for filtering tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

import pytest

from gridfilter_core.adapters.memory import InMemoryQuerySource
from gridfilter_core.domain.schema import RecordSchema
from gridfilter_filtering import ParserOptions, ValueParser

NOW = datetime(2024, 6, 1, 12, 0, 0)


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    Id: int
    Message: str
    Level: LogLevel
    TimeStamp: datetime
    Age: int = 0
    Source: str | None = None


ENTRIES = (
    LogEntry(1, "Service started", LogLevel.INFO, NOW - timedelta(days=3), 25, "api"),
    LogEntry(2, "Disk almost full", LogLevel.ERROR, NOW - timedelta(hours=30), 35),
    LogEntry(3, "cache miss foo", LogLevel.DEBUG, NOW - timedelta(hours=2), 40, "cache"),
    LogEntry(4, "Request foo handled", LogLevel.INFO, NOW - timedelta(minutes=5), 30, "api"),
    LogEntry(5, "Foo failed", LogLevel.ERROR, NOW - timedelta(days=10), 50, "worker"),
)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def entries() -> tuple[LogEntry, ...]:
    return ENTRIES


@pytest.fixture
def schema() -> RecordSchema[LogEntry]:
    return RecordSchema.from_type(LogEntry)


@pytest.fixture
def parser() -> ValueParser:
    """Parser whose clock is frozen at NOW."""
    return ValueParser(ParserOptions(clock=lambda: NOW))


@pytest.fixture
def source() -> InMemoryQuerySource[LogEntry]:
    return InMemoryQuerySource(ENTRIES)


@pytest.fixture
def log_level() -> type[LogLevel]:
    return LogLevel
