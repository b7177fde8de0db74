"""Date, date-time and duration formatting for iCalendar properties."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ..timezone import convert_to_timezone, to_utc

DATE_FORMAT = "%Y%m%d"
DATE_TIME_FORMAT = "%Y%m%dT%H%M%S"


class TimeModeKind(str, Enum):
    """How a date-time is anchored in time."""

    UTC = "utc"
    FLOATING = "floating"
    ZONED = "zoned"


@dataclass(frozen=True)
class TimeMode:
    """Resolved time mode of an event: UTC, floating or zoned(name)."""

    kind: TimeModeKind
    zone: Optional[str] = None

    @classmethod
    def utc(cls) -> "TimeMode":
        return cls(TimeModeKind.UTC)

    @classmethod
    def floating(cls) -> "TimeMode":
        return cls(TimeModeKind.FLOATING)

    @classmethod
    def zoned(cls, zone: str) -> "TimeMode":
        return cls(TimeModeKind.ZONED, zone)

    @property
    def is_floating(self) -> bool:
        return self.kind is TimeModeKind.FLOATING

    @property
    def is_zoned(self) -> bool:
        return self.kind is TimeModeKind.ZONED


def format_utc(value: datetime) -> str:
    """Format an instant as a UTC date-time token (``YYYYMMDDTHHMMSSZ``)."""
    return to_utc(value).strftime(DATE_TIME_FORMAT) + "Z"


def format_date(value: datetime, mode: TimeMode, date_only: bool = False) -> str:
    """Format a stored datetime as a DATE or DATE-TIME token.

    All-day and floating values use the stored value's own wall clock, so a
    date entered as 2013-10-04 stays on that day whatever the zone. Zoned
    values are converted to the zone's local time; UTC values get a trailing
    ``Z``.
    """
    if date_only:
        return value.strftime(DATE_FORMAT)
    if mode.is_floating:
        return value.strftime(DATE_TIME_FORMAT)
    if mode.is_zoned and mode.zone:
        return convert_to_timezone(value, mode.zone).strftime(DATE_TIME_FORMAT)
    return format_utc(value)


def format_date_property(
    name: str, value: datetime, mode: TimeMode, all_day: bool = False
) -> str:
    """Build a full date property line such as ``DTSTART;TZID=Europe/Berlin:...``."""
    if all_day:
        return f"{name};VALUE=DATE:{format_date(value, mode, date_only=True)}"
    if mode.is_zoned:
        return f"{name};TZID={mode.zone}:{format_date(value, mode)}"
    return f"{name}:{format_date(value, mode)}"


def format_date_list_property(
    name: str, values: list[datetime], mode: TimeMode, all_day: bool = False
) -> str:
    """Build a multi-valued date property line such as ``EXDATE``."""
    tokens = ",".join(format_date(value, mode, date_only=all_day) for value in values)
    if all_day:
        return f"{name};VALUE=DATE:{tokens}"
    if mode.is_zoned:
        return f"{name};TZID={mode.zone}:{tokens}"
    return f"{name}:{tokens}"


def format_duration(seconds: int) -> str:
    """Format a number of seconds as an RFC 5545 duration.

    Example:
        >>> format_duration(-600)
        '-PT10M'
        >>> format_duration(90000)
        'P1DT1H'
    """
    result = ""
    if seconds < 0:
        result = "-"
        seconds = -seconds

    result += "P"
    if seconds >= 86400:
        result += f"{seconds // 86400}D"
        seconds %= 86400

    if not seconds and len(result) > 1 and result[-1] != "P":
        return result

    result += "T"
    if seconds >= 3600:
        result += f"{seconds // 3600}H"
        seconds %= 3600
    if seconds >= 60:
        result += f"{seconds // 60}M"
        seconds %= 60
    if seconds > 0 or result.endswith("T"):
        result += f"{seconds}S"

    return result


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a stored datetime for JSON snapshots."""
    if value is None:
        return None
    return value.isoformat()
