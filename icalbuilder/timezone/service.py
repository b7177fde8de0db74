"""Core timezone service for icalbuilder.

Resolves zone names with zoneinfo and falls back to pytz for names the local
zoneinfo database does not know. Parsing of ISO-8601 strings goes through
python-dateutil so that the full ISO grammar (week dates, ordinal dates,
compact forms) is accepted.
"""

import logging
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytz
from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

UTC = dt_timezone.utc


class TimezoneError(Exception):
    """Raised when timezone operations fail."""


class TimezoneService:
    """Centralized timezone service for icalbuilder.

    All zone lookups go through this service so that a calendar and its
    events agree on which names are valid.
    """

    def __init__(self) -> None:
        """Initialize timezone service."""
        self._cache: dict[str, tzinfo] = {}

    def get_timezone(self, name: str) -> tzinfo:
        """Get timezone object for a zone name.

        Args:
            name: IANA zone name, e.g. ``Europe/Berlin``.

        Returns:
            Timezone object usable with ``datetime.astimezone``.

        Raises:
            TimezoneError: If the name is unknown to both zoneinfo and pytz.
        """
        if not isinstance(name, str) or not name.strip():
            raise TimezoneError(f"Invalid timezone name: {name!r}")

        cached = self._cache.get(name)
        if cached is not None:
            return cached

        try:
            tz: tzinfo = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            try:
                tz = pytz.timezone(name)
                logger.debug("Resolved timezone %s through pytz", name)
            except pytz.UnknownTimeZoneError as e:
                raise TimezoneError(f"Unknown timezone: {name}") from e

        self._cache[name] = tz
        return tz

    def is_valid_timezone(self, name: str) -> bool:
        """Check whether a zone name can be resolved."""
        try:
            self.get_timezone(name)
        except TimezoneError:
            return False
        return True

    def ensure_timezone_aware(self, dt: datetime, fallback_tz: Optional[tzinfo] = None) -> datetime:
        """Ensure datetime has timezone information.

        Naive datetimes get ``fallback_tz`` (UTC by default); aware datetimes
        are returned unchanged.

        Raises:
            TypeError: If dt is not a datetime object.
        """
        if not isinstance(dt, datetime):
            raise TypeError(f"Expected datetime object, got {type(dt)}")

        if dt.tzinfo is not None and dt.utcoffset() is not None:
            return dt

        tz = fallback_tz or UTC
        if hasattr(tz, "localize"):
            return tz.localize(dt)
        return dt.replace(tzinfo=tz)

    def convert_to_timezone(self, dt: datetime, name: str) -> datetime:
        """Convert an aware datetime to the named zone.

        Raises:
            TimezoneError: If the zone is unknown.
        """
        return self.ensure_timezone_aware(dt).astimezone(self.get_timezone(name))

    def to_utc(self, dt: datetime) -> datetime:
        """Convert datetime to UTC, reading naive values as UTC."""
        return self.ensure_timezone_aware(dt).astimezone(UTC)

    def parse_datetime(self, iso_string: str, fallback_tz: Optional[tzinfo] = None) -> datetime:
        """Parse an ISO-8601 string into an aware datetime.

        Raises:
            TimezoneError: If the string is not valid ISO-8601.
            TypeError: If iso_string is not a string.
        """
        if not isinstance(iso_string, str):
            raise TypeError(f"Expected string, got {type(iso_string)}")

        try:
            dt = isoparse(iso_string.strip())
        except (ValueError, OverflowError) as e:
            raise TimezoneError(f"Failed to parse ISO datetime '{iso_string}': {e}") from e

        return self.ensure_timezone_aware(dt, fallback_tz)

    def now_utc(self) -> datetime:
        """Get current time in UTC."""
        return datetime.now(UTC)


_timezone_service: Optional[TimezoneService] = None


def get_timezone_service() -> TimezoneService:
    """Get global timezone service instance.

    Returns:
        Singleton TimezoneService instance.
    """
    if globals()["_timezone_service"] is None:
        globals()["_timezone_service"] = TimezoneService()
    return globals()["_timezone_service"]


def get_timezone(name: str) -> tzinfo:
    """Get timezone object for a zone name."""
    return get_timezone_service().get_timezone(name)


def is_valid_timezone(name: str) -> bool:
    """Check whether a zone name can be resolved."""
    return get_timezone_service().is_valid_timezone(name)


def ensure_timezone_aware(dt: datetime, fallback_tz: Optional[tzinfo] = None) -> datetime:
    """Ensure datetime has timezone information."""
    return get_timezone_service().ensure_timezone_aware(dt, fallback_tz)


def convert_to_timezone(dt: datetime, name: str) -> datetime:
    """Convert an aware datetime to the named zone."""
    return get_timezone_service().convert_to_timezone(dt, name)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC."""
    return get_timezone_service().to_utc(dt)


def parse_datetime(iso_string: str, fallback_tz: Optional[tzinfo] = None) -> datetime:
    """Parse an ISO-8601 string into an aware datetime."""
    return get_timezone_service().parse_datetime(iso_string, fallback_tz)


def now_utc() -> datetime:
    """Get current time in UTC."""
    return get_timezone_service().now_utc()
