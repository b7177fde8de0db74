"""Calendar event (VEVENT component)."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from .alarm import Alarm
from .attendee import Attendee
from .base import NOT_SET, ICalComponent
from .category import Category
from .escaping import escape, fold_lines, quote_param
from .exceptions import ICalRenderError
from .formatting import TimeMode, format_date_property, format_utc, to_iso
from .models import BusyStatus, EventStatus, Organizer
from .recurrence import RepeatingRule, encode_exdate, encode_rrule, validate_repeating
from .validators import (
    as_list,
    validate_datetime,
    validate_int,
    validate_optional_datetime,
    validate_optional_enum,
    validate_organizer,
    validate_text,
    validate_timezone,
    validate_timestamp,
)

if TYPE_CHECKING:
    from .calendar import Calendar

logger = logging.getLogger(__name__)


class Event(ICalComponent):
    """A single event of a calendar.

    Usually created through ``Calendar.create_event``; the bare constructor
    takes a snapshot (mapping or JSON string) and the owning calendar.

    ``timezone`` and ``floating`` share one time mode: the event inherits the
    calendar timezone, floats, or is pinned to its own zone. Setting
    ``floating(True)`` drops an own timezone and setting a timezone ends
    floating; ``floating(False)`` and ``timezone(None)`` leave the other one
    alone.

    Setting ``start`` after ``end`` (or ``end`` before ``start``) swaps the
    two, so ``start <= end`` holds once both are set.
    """

    _kind = "event"
    _attributes = (
        "id",
        "sequence",
        "start",
        "end",
        "timezone",
        "floating",
        "stamp",
        "all_day",
        "repeating",
        "summary",
        "location",
        "description",
        "html_description",
        "organizer",
        "attendees",
        "alarms",
        "categories",
        "status",
        "busystatus",
        "url",
        "created",
        "last_modified",
    )
    _aliases = {
        "uid": "id",
        "timestamp": "stamp",
        "allDay": "all_day",
        "htmlDescription": "html_description",
        "lastModified": "last_modified",
    }
    _internal = ("time_mode",)
    _parent_role = "calendar"

    def __init__(self, data: Any = None, calendar: "Calendar" = None) -> None:
        super().__init__(data, calendar)

    def _defaults(self) -> dict[str, Any]:
        return {
            "id": self._parent.id_factory(),
            "sequence": 0,
            "start": None,
            "end": None,
            "time_mode": None,
            "stamp": validate_datetime(self._parent.clock(), "stamp"),
            "all_day": False,
            "repeating": None,
            "summary": "",
            "location": None,
            "description": None,
            "html_description": None,
            "organizer": None,
            "attendees": [],
            "alarms": [],
            "categories": [],
            "status": None,
            "busystatus": None,
            "url": None,
            "created": None,
            "last_modified": None,
        }

    def calendar(self) -> "Calendar":
        """The owning calendar."""
        return self._parent

    # Identity

    def id(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["id"]
        self._data["id"] = value
        return self

    def uid(self, value: Any = NOT_SET) -> Any:
        """Alias of ``id``."""
        return self.id(value)

    def external_uid(self) -> str:
        """UID property value: ``id@domain``, or just the id without a domain."""
        domain = self._parent.domain()
        if domain:
            return f"{self._data['id']}@{domain}"
        return str(self._data["id"])

    def sequence(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["sequence"]
        self._data["sequence"] = validate_int(value, "sequence", minimum=0)
        return self

    # Dates

    def start(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["start"]
        start = validate_datetime(value, "start")
        end = self._data["end"]
        if end is not None and start > end:
            logger.debug("Event %s: start after end, swapping", self._data["id"])
            self._data["start"], self._data["end"] = end, start
        else:
            self._data["start"] = start
        return self

    def end(self, value: Any = NOT_SET) -> Any:
        """End of the event; ``None`` removes it."""
        if value is NOT_SET:
            return self._data["end"]
        end = validate_optional_datetime(value, "end")
        start = self._data["start"]
        if end is not None and start is not None and end < start:
            logger.debug("Event %s: end before start, swapping", self._data["id"])
            self._data["start"], self._data["end"] = end, start
        else:
            self._data["end"] = end
        return self

    def stamp(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["stamp"]
        self._data["stamp"] = validate_datetime(value, "stamp")
        return self

    def timestamp(self, value: Any = NOT_SET) -> Any:
        """Alias of ``stamp``."""
        return self.stamp(value)

    def created(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["created"]
        self._data["created"] = validate_timestamp(value, "created")
        return self

    def last_modified(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["last_modified"]
        self._data["last_modified"] = validate_timestamp(value, "last_modified")
        return self

    def all_day(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["all_day"]
        self._data["all_day"] = bool(value)
        return self

    # Time mode

    def timezone(self, value: Any = NOT_SET) -> Any:
        """Own timezone, or the calendar's one while the event has none."""
        mode: Optional[TimeMode] = self._data["time_mode"]
        if value is NOT_SET:
            if mode is not None and mode.is_zoned:
                return mode.zone
            return self._parent.timezone()

        zone = validate_timezone(value, "timezone")
        if zone is not None:
            self._data["time_mode"] = TimeMode.zoned(zone)
        elif mode is not None and mode.is_zoned:
            self._data["time_mode"] = None
        return self

    def floating(self, value: Any = NOT_SET) -> Any:
        mode: Optional[TimeMode] = self._data["time_mode"]
        if value is NOT_SET:
            return mode is not None and mode.is_floating

        if value:
            self._data["time_mode"] = TimeMode.floating()
        elif mode is not None and mode.is_floating:
            self._data["time_mode"] = None
        return self

    def time_mode(self) -> TimeMode:
        """Mode used to render DTSTART/DTEND, resolved against the calendar."""
        mode: Optional[TimeMode] = self._data["time_mode"]
        if mode is not None:
            return mode
        zone = self._parent.timezone()
        if zone:
            return TimeMode.zoned(zone)
        return TimeMode.utc()

    # Recurrence

    def repeating(self, value: Any = NOT_SET) -> Any:
        """Recurrence rule given as a mapping or ``RepeatingRule``; ``None`` removes it."""
        if value is NOT_SET:
            return self._data["repeating"]
        self._data["repeating"] = validate_repeating(value)
        return self

    # Text

    def summary(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["summary"]
        self._data["summary"] = validate_text(value, default="")
        return self

    def location(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["location"]
        self._data["location"] = validate_text(value)
        return self

    def description(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["description"]
        self._data["description"] = validate_text(value)
        return self

    def html_description(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["html_description"]
        self._data["html_description"] = validate_text(value)
        return self

    def url(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["url"]
        self._data["url"] = validate_text(value)
        return self

    def organizer(self, value: Any = NOT_SET) -> Any:
        """Organizer as ``Organizer``, ``{"name", "email"}`` or ``"Name <email>"``."""
        if value is NOT_SET:
            return self._data["organizer"]
        self._data["organizer"] = validate_organizer(value)
        return self

    def status(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["status"]
        self._data["status"] = validate_optional_enum(value, EventStatus, "status")
        return self

    def busystatus(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["busystatus"]
        self._data["busystatus"] = validate_optional_enum(value, BusyStatus, "busystatus")
        return self

    # Children

    def create_attendee(self, data: Any = None) -> Attendee:
        """Append an attendee built from ``data`` (or ``data`` itself) and return it."""
        attendee = data if isinstance(data, Attendee) else Attendee(data, self)
        self._data["attendees"].append(attendee)
        return attendee

    def attendees(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return list(self._data["attendees"])
        for item in as_list(value):
            self.create_attendee(item)
        return self

    def create_alarm(self, data: Any = None) -> Alarm:
        """Append an alarm built from ``data`` (or ``data`` itself) and return it."""
        alarm = data if isinstance(data, Alarm) else Alarm(data, self)
        self._data["alarms"].append(alarm)
        return alarm

    def alarms(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return list(self._data["alarms"])
        for item in as_list(value):
            self.create_alarm(item)
        return self

    def create_category(self, data: Any = None) -> Category:
        """Append a category built from ``data`` (or ``data`` itself) and return it."""
        category = data if isinstance(data, Category) else Category(data, self)
        self._data["categories"].append(category)
        return category

    def categories(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return list(self._data["categories"])
        for item in as_list(value):
            self.create_category(item)
        return self

    # Output

    def render_lines(self) -> list[str]:
        """VEVENT block as unfolded content lines.

        Raises:
            ICalRenderError: If ``start`` or ``stamp`` is missing, or a child
                entity cannot be rendered.
        """
        start: Optional[datetime] = self._data["start"]
        if start is None:
            raise ICalRenderError("No value for `start` in Event given!", field="start")
        if self._data["stamp"] is None:
            raise ICalRenderError("No value for `stamp` in Event given!", field="stamp")

        mode = self.time_mode()
        all_day = self._data["all_day"]

        lines = [
            "BEGIN:VEVENT",
            f"UID:{self.external_uid()}",
            f"SEQUENCE:{self._data['sequence']}",
            f"DTSTAMP:{format_utc(self._data['stamp'])}",
            format_date_property("DTSTART", start, mode, all_day),
        ]

        if self._data["end"] is not None:
            lines.append(format_date_property("DTEND", self._data["end"], mode, all_day))

        if all_day:
            lines.append("X-MICROSOFT-CDO-ALLDAYEVENT:TRUE")
            lines.append("X-MICROSOFT-MSNCALENDAR-ALLDAYEVENT:TRUE")

        rule: Optional[RepeatingRule] = self._data["repeating"]
        if rule is not None:
            lines.append(encode_rrule(rule, mode, all_day))
            exdate = encode_exdate(rule, mode, all_day)
            if exdate:
                lines.append(exdate)

        lines.append(f"SUMMARY:{escape(self._data['summary'])}")

        if self._data["location"]:
            lines.append(f"LOCATION:{escape(self._data['location'])}")
        if self._data["description"]:
            lines.append(f"DESCRIPTION:{escape(self._data['description'])}")
        if self._data["html_description"]:
            lines.append(f"X-ALT-DESC;FMTTYPE=text/html:{escape(self._data['html_description'])}")

        organizer: Optional[Organizer] = self._data["organizer"]
        if organizer is not None:
            lines.append(f"ORGANIZER;CN={quote_param(organizer.name)}:mailto:{organizer.email}")

        lines.extend(attendee.render() for attendee in self._data["attendees"])

        if self._data["categories"]:
            names = ",".join(category.render() for category in self._data["categories"])
            lines.append(f"CATEGORIES:{names}")

        if self._data["url"]:
            lines.append(f"URL;VALUE=URI:{escape(self._data['url'])}")
        if self._data["status"] is not None:
            lines.append(f"STATUS:{self._data['status'].value}")
        if self._data["busystatus"] is not None:
            lines.append(f"X-MICROSOFT-CDO-BUSYSTATUS:{self._data['busystatus'].value}")
        if self._data["created"] is not None:
            lines.append(f"CREATED:{format_utc(self._data['created'])}")
        if self._data["last_modified"] is not None:
            lines.append(f"LAST-MODIFIED:{format_utc(self._data['last_modified'])}")

        for alarm in self._data["alarms"]:
            lines.extend(alarm.render_lines())

        lines.append("END:VEVENT")
        return lines

    def render(self) -> str:
        """Folded, CRLF-terminated VEVENT block."""
        return fold_lines(self.render_lines())

    def to_json(self) -> dict[str, Any]:
        mode: Optional[TimeMode] = self._data["time_mode"]
        rule: Optional[RepeatingRule] = self._data["repeating"]
        organizer: Optional[Organizer] = self._data["organizer"]

        data: dict[str, Any] = {"id": self._data["id"], "sequence": self._data["sequence"]}
        if self._data["start"] is not None:
            data["start"] = to_iso(self._data["start"])
        data.update(
            {
                "end": to_iso(self._data["end"]),
                "timezone": mode.zone if mode is not None and mode.is_zoned else None,
                "floating": mode is not None and mode.is_floating,
                "stamp": to_iso(self._data["stamp"]),
                "all_day": self._data["all_day"],
                "repeating": rule.to_json() if rule is not None else None,
                "summary": self._data["summary"],
                "location": self._data["location"],
                "description": self._data["description"],
                "html_description": self._data["html_description"],
                "organizer": organizer.model_dump() if organizer is not None else None,
                "attendees": [attendee.to_json() for attendee in self._data["attendees"]],
                "alarms": [alarm.to_json() for alarm in self._data["alarms"]],
                "categories": [category.to_json() for category in self._data["categories"]],
                "status": self._data["status"].value if self._data["status"] else None,
                "busystatus": self._data["busystatus"].value if self._data["busystatus"] else None,
                "url": self._data["url"],
            }
        )
        for name in ("created", "last_modified"):
            if self._data[name] is not None:
                data[name] = to_iso(self._data[name])

        data.update(self._extra_json())
        return data
