"""iCalendar entity model and serializer."""

from .alarm import Alarm
from .attendee import Attendee
from .calendar import Calendar
from .category import Category
from .event import Event
from .exceptions import (
    ICalError,
    ICalRenderError,
    ICalSnapshotError,
    ICalValidationError,
    MissingParentError,
)
from .formatting import TimeMode
from .models import (
    AlarmType,
    Attachment,
    AttendeeRole,
    AttendeeStatus,
    AttendeeType,
    BusyStatus,
    CalendarMethod,
    EventStatus,
    Frequency,
    Organizer,
    ProductId,
    Weekday,
)
from .recurrence import RepeatingRule

__all__ = [
    "Alarm",
    "AlarmType",
    "Attachment",
    "Attendee",
    "AttendeeRole",
    "AttendeeStatus",
    "AttendeeType",
    "BusyStatus",
    "Calendar",
    "CalendarMethod",
    "Category",
    "Event",
    "EventStatus",
    "Frequency",
    "ICalError",
    "ICalRenderError",
    "ICalSnapshotError",
    "ICalValidationError",
    "MissingParentError",
    "Organizer",
    "ProductId",
    "RepeatingRule",
    "TimeMode",
    "Weekday",
]
