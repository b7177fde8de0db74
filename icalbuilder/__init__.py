"""icalbuilder - build iCalendar (RFC 5545) documents from Python objects."""

from typing import Any

from .ics import (
    Alarm,
    Attendee,
    Calendar,
    Category,
    Event,
    ICalError,
    ICalRenderError,
    ICalSnapshotError,
    ICalValidationError,
    MissingParentError,
)
from .timezone import TimezoneError

__version__ = "1.0.0"
__author__ = "icalbuilder Team"
__description__ = "Build iCalendar documents with validated events, attendees and alarms"


def ical(data: Any = None, **kwargs: Any) -> Calendar:
    """Create a calendar from a snapshot (mapping or JSON string).

    Keyword arguments (``settings``, ``clock``, ``id_factory``) are passed to
    ``Calendar``.

    Example:
        >>> cal = ical({"domain": "example.com", "prod_id": "//acme//planner//EN"})
        >>> cal.create_event({"start": "2013-10-04T22:39:30Z", "summary": "Launch"})
    """
    return Calendar(data, **kwargs)


__all__ = [
    "Alarm",
    "Attendee",
    "Calendar",
    "Category",
    "Event",
    "ICalError",
    "ICalRenderError",
    "ICalSnapshotError",
    "ICalValidationError",
    "MissingParentError",
    "TimezoneError",
    "__author__",
    "__description__",
    "__version__",
    "ical",
]
