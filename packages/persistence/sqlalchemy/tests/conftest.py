"""Shared fixtures for the SQLAlchemy adapter tests (aiosqlite, in-memory)."""

from __future__ import annotations

import enum
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

NOW = datetime(2024, 6, 1, 12, 0, 0)


class LogLevel(enum.Enum):
    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"


class Base(DeclarativeBase):
    pass


class LogEntryRecord(Base):
    __tablename__ = "log_entries"
    Id: Mapped[int] = mapped_column(Integer, primary_key=True)
    Message: Mapped[str] = mapped_column(String)
    Level: Mapped[LogLevel] = mapped_column(Enum(LogLevel))
    TimeStamp: Mapped[datetime] = mapped_column(DateTime)
    Age: Mapped[int] = mapped_column(Integer, default=0)
    Source: Mapped[str | None] = mapped_column(String, nullable=True)


ROWS = (
    (1, "Service started", LogLevel.INFO, NOW - timedelta(days=3), 25, "api"),
    (2, "Disk almost full", LogLevel.ERROR, NOW - timedelta(hours=30), 35, None),
    (3, "cache miss foo", LogLevel.DEBUG, NOW - timedelta(hours=2), 40, "cache"),
    (4, "Request foo handled", LogLevel.INFO, NOW - timedelta(minutes=5), 30, "api"),
    (5, "Foo failed", LogLevel.ERROR, NOW - timedelta(days=10), 50, "worker"),
    (6, "100% done_ok", LogLevel.INFO, NOW - timedelta(days=1), 30, "batch"),
)


@pytest.fixture
def log_model() -> type[LogEntryRecord]:
    return LogEntryRecord


@pytest.fixture
def log_level() -> type[LogLevel]:
    return LogLevel


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    # every count/slice opens its own session; they must share one database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        session.add_all(
            LogEntryRecord(
                Id=id_,
                Message=message,
                Level=level,
                TimeStamp=timestamp,
                Age=age,
                Source=source,
            )
            for id_, message, level, timestamp, age, source in ROWS
        )
        await session.commit()

    yield factory
    await engine.dispose()
