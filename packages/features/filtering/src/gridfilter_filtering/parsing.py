"""
ValueParser — text → native value conversion for filter values.

Parsing is soft: malformed input yields ``None`` rather than an exception,
so ``None`` always means "no usable value" while ``False``, ``0`` and
``Decimal(0)`` are real values.

Culture-dependent behaviour (separators, accepted date formats, the clock
used for relative dates) lives in :class:`ParserOptions`, never in ambient
process state.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from .operators import FilterOperator

logger = logging.getLogger("gridfilter.parsing")

_DEFAULT_DATETIME_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
)

# [-]d  or  [-][d.]hh:mm[:ss[.fffffff]]
_DAYS_ONLY = re.compile(r"^(?P<sign>-)?(?P<days>\d+)$")
_CLOCK_FORM = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?$"
)
_SHORTHAND = re.compile(
    r"^(?P<sign>[-+])?(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>ms|w|d|h|m|s)$",
    re.IGNORECASE,
)
_SHORTHAND_UNITS: dict[str, str] = {
    "ms": "milliseconds",
    "w": "weeks",
    "d": "days",
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
}


@dataclass(frozen=True)
class ParserOptions:
    """Formatting profile used by :class:`ValueParser`."""

    separator: str = ","
    quote: str = '"'
    trim: bool = True
    duration_space_replacement: str = "."
    allow_shorthand_durations: bool = True
    datetime_formats: tuple[str, ...] = _DEFAULT_DATETIME_FORMATS
    clock: Callable[[], datetime] = field(default=datetime.now)


def split_values(
    raw: str,
    separator: str = ",",
    *,
    quote: str = '"',
    trim: bool = True,
) -> list[str]:
    """
    Split *raw* on *separator*, leaving quoted sections intact.

    Quote characters are removed from the output. Empty parts are kept
    (``"a,,b"`` → ``["a", "", "b"]``).

    >>> split_values('a, b ,"c,d"')
    ['a', 'b', 'c,d']
    """
    parts: list[str] = []
    current: list[str] = []
    quoted = False
    for char in raw:
        if char == quote:
            quoted = not quoted
        elif char == separator and not quoted:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts] if trim else parts


class ValueParser:
    """
    Converts filter text into values of a field's native type.

    Supported targets: ``str`` / ``object`` (returned unchanged), ``bool``,
    ``int``, ``float``, ``Decimal``, ``datetime``, ``date``, ``time``,
    ``timedelta``, ``uuid.UUID`` and ``Enum`` subclasses.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        self.options = options or ParserOptions()

    # -- public API ----------------------------------------------------------

    def split(self, raw: str) -> list[str]:
        return split_values(
            raw,
            self.options.separator,
            quote=self.options.quote,
            trim=self.options.trim,
        )

    def parse_single(self, raw: str, target_type: Any) -> Any | None:
        """Parse one value, returning ``None`` when *raw* is not a valid literal."""
        if target_type is Any or target_type is object:
            return raw
        if not isinstance(target_type, type):
            logger.debug("Cannot parse into non-class target %r", target_type)
            return None

        if issubclass(target_type, Enum):
            return self._parse_enum(raw, target_type)
        if issubclass(target_type, str):
            return raw
        if issubclass(target_type, bool):
            return self._parse_bool(raw)
        if issubclass(target_type, int):
            return self._parse_int(raw, target_type)
        if issubclass(target_type, float):
            return self._parse_float(raw)
        if issubclass(target_type, Decimal):
            return self._parse_decimal(raw)
        if issubclass(target_type, datetime):
            return self._parse_datetime(raw)
        if issubclass(target_type, date):
            return self._parse_date(raw)
        if issubclass(target_type, time):
            return self._parse_time(raw)
        if issubclass(target_type, timedelta):
            return self.parse_duration(raw)
        if issubclass(target_type, uuid.UUID):
            return self._parse_uuid(raw)

        logger.debug("No parser registered for type %s", target_type.__name__)
        return None

    def parse_duration(self, raw: str) -> timedelta | None:
        """
        Parse a signed duration.

        Accepts ``[-]d`` and ``[-][d.]hh:mm[:ss[.fffffff]]``. Without a day
        part the hour count may exceed 23 (``"-24:00:00"`` is one day back).
        A space between the day count and the time of day is read as the period
        (``"-1 12:34:56"`` == ``"-1.12:34:56"``). Shorthand such as ``7d``
        or ``-24h`` is accepted when enabled in the options.
        """
        text = raw.strip()
        if not text:
            return None
        canonical = text.replace(" ", self.options.duration_space_replacement)

        match = _DAYS_ONLY.match(canonical)
        if match:
            magnitude = timedelta(days=int(match["days"]))
            return -magnitude if match["sign"] else magnitude

        match = _CLOCK_FORM.match(canonical)
        if match:
            hours, minutes = int(match["hours"]), int(match["minutes"])
            seconds = int(match["seconds"] or 0)
            if minutes > 59 or seconds > 59:
                return None
            if match["days"] and hours > 23:
                return None
            fraction = (match["fraction"] or "").ljust(7, "0")
            magnitude = timedelta(
                days=int(match["days"] or 0),
                hours=hours,
                minutes=minutes,
                seconds=seconds,
                microseconds=int(fraction) / 10,
            )
            return -magnitude if match["sign"] else magnitude

        if self.options.allow_shorthand_durations:
            match = _SHORTHAND.match(text)
            if match:
                unit = _SHORTHAND_UNITS[match["unit"].lower()]
                magnitude = timedelta(**{unit: float(match["amount"])})
                return -magnitude if match["sign"] == "-" else magnitude

        return None

    def parse_filter_values(
        self,
        target_type: Any,
        operator: FilterOperator,
        raw: str | None,
        *,
        now: datetime | None = None,
    ) -> list[Any] | None:
        """
        Turn a filter's raw text into the list of values it compares against.

        - ``Any``/``NotAny`` split *raw* and keep every part that parses.
        - A date/time target with a value starting with ``-`` is relative:
          the text is a duration added to *now*.
        - Anything else yields a single parsed value.

        Returns ``None`` when no usable value remains.
        """
        if not raw:
            return None

        if operator.is_multi_value:
            values = [
                value
                for part in self.split(raw)
                if (value := self.parse_single(part, target_type)) is not None
            ]
            return values or None

        if _is_date_like(target_type) and raw.startswith("-"):
            offset = self.parse_duration(raw)
            if offset is None:
                return None
            moment = (now if now is not None else self.options.clock()) + offset
            if not issubclass(target_type, datetime) and isinstance(moment, datetime):
                return [moment.date()]
            return [moment]

        value = self.parse_single(raw, target_type)
        if value is None:
            return None
        return [value]

    # -- per-type parsers ----------------------------------------------------

    @staticmethod
    def _parse_enum(raw: str, target_type: type[Enum]) -> Enum | None:
        text = raw.strip()
        lowered = text.lower()
        for member in target_type:
            if member.name.lower() == lowered:
                return member
        for member in target_type:
            if str(member.value).lower() == lowered:
                return member
        return None

    @staticmethod
    def _parse_bool(raw: str) -> bool | None:
        text = raw.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        return None

    @staticmethod
    def _parse_int(raw: str, target_type: type[int]) -> int | None:
        if "_" in raw:
            return None
        try:
            return target_type(int(raw.strip()))
        except ValueError:
            return None

    @staticmethod
    def _parse_float(raw: str) -> float | None:
        if "_" in raw:
            return None
        try:
            return float(raw)
        except ValueError:
            return None

    @staticmethod
    def _parse_decimal(raw: str) -> Decimal | None:
        if "_" in raw:
            return None
        try:
            value = Decimal(raw.strip())
        except InvalidOperation:
            return None
        return value if value.is_finite() else None

    def _parse_datetime(self, raw: str) -> datetime | None:
        text = raw.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(_normalise_utc_suffix(text))
        except ValueError:
            pass
        for fmt in self.options.datetime_formats:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        return None

    def _parse_date(self, raw: str) -> date | None:
        text = raw.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        moment = self._parse_datetime(text)
        return moment.date() if moment is not None else None

    @staticmethod
    def _parse_time(raw: str) -> time | None:
        try:
            return time.fromisoformat(raw.strip())
        except ValueError:
            return None

    @staticmethod
    def _parse_uuid(raw: str) -> uuid.UUID | None:
        try:
            return uuid.UUID(raw.strip())
        except ValueError:
            return None


def _is_date_like(target_type: Any) -> bool:
    return isinstance(target_type, type) and issubclass(target_type, date)


def _normalise_utc_suffix(text: str) -> str:
    # datetime.fromisoformat only accepts a trailing "Z" from Python 3.11
    if text.endswith(("Z", "z")):
        return text[:-1] + "+00:00"
    return text


_default_parser = ValueParser()


def parse_single(raw: str, target_type: Any) -> Any | None:
    """Parse with the default options. See :meth:`ValueParser.parse_single`."""
    return _default_parser.parse_single(raw, target_type)


def parse_duration(raw: str) -> timedelta | None:
    """Parse with the default options. See :meth:`ValueParser.parse_duration`."""
    return _default_parser.parse_duration(raw)


def parse_filter_values(
    target_type: Any,
    operator: FilterOperator,
    raw: str | None,
    *,
    now: datetime | None = None,
) -> list[Any] | None:
    """Parse with the default options. See :meth:`ValueParser.parse_filter_values`."""
    return _default_parser.parse_filter_values(target_type, operator, raw, now=now)
