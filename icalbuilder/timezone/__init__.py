"""
Timezone package for icalbuilder.

Provides centralized timezone handling with a clean public API.
Uses zoneinfo + pytz fallback strategy for zone lookups.

Example usage:
    >>> from icalbuilder.timezone import convert_to_timezone, parse_datetime
    >>>
    >>> dt = parse_datetime("2013-10-04T22:39:30Z")
    >>> berlin = convert_to_timezone(dt, "Europe/Berlin")
"""

from .service import (
    UTC,
    TimezoneError,
    TimezoneService,
    convert_to_timezone,
    ensure_timezone_aware,
    get_timezone,
    get_timezone_service,
    is_valid_timezone,
    now_utc,
    parse_datetime,
    to_utc,
)

__all__ = [
    "UTC",
    "TimezoneError",
    "TimezoneService",
    "convert_to_timezone",
    "ensure_timezone_aware",
    "get_timezone",
    "get_timezone_service",
    "is_valid_timezone",
    "now_utc",
    "parse_datetime",
    "to_utc",
]
