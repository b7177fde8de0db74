"""Event alarm (VALARM component)."""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional, Union

from .base import NOT_SET, ICalComponent
from .escaping import escape
from .exceptions import ICalRenderError, ICalValidationError
from .formatting import format_duration, format_utc, to_iso
from .models import AlarmType, Attachment
from .validators import (
    validate_datetime,
    validate_int,
    validate_optional_enum,
    validate_text,
    validation_error,
)

if TYPE_CHECKING:
    from .event import Event

# Ten minutes before the event starts
DEFAULT_TRIGGER = -600

Trigger = Union[int, datetime]


class Alarm(ICalComponent):
    """Reminder attached to an event.

    The trigger is either a number of seconds relative to the event start or
    an absolute date. ``trigger`` and ``trigger_before`` take seconds before
    the start, ``trigger_after`` seconds after it.
    """

    _kind = "alarm"
    _attributes = ("type", "trigger", "repeat", "interval", "attach", "description")
    _actions = ("trigger_before", "trigger_after")
    _aliases = {"triggerBefore": "trigger_before", "triggerAfter": "trigger_after"}
    _parent_role = "event"

    def __init__(self, data: Any = None, event: "Event" = None) -> None:
        super().__init__(data, event)

    def _defaults(self) -> dict[str, Any]:
        return {
            "type": None,
            "trigger": DEFAULT_TRIGGER,
            "repeat": None,
            "interval": None,
            "attach": None,
            "description": None,
        }

    def type(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["type"]
        self._data["type"] = validate_optional_enum(value, AlarmType, "type")
        return self

    def trigger(self, value: Any = NOT_SET) -> Any:
        """Seconds before the event start, or an absolute date."""
        return self.trigger_before(value)

    def trigger_before(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            current = self._data["trigger"]
            return current if isinstance(current, datetime) else -current
        trigger = _validate_trigger(value, "trigger")
        self._data["trigger"] = trigger if isinstance(trigger, datetime) else -trigger
        return self

    def trigger_after(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["trigger"]
        self._data["trigger"] = _validate_trigger(value, "trigger")
        return self

    def repeat(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["repeat"]
        self._data["repeat"] = None if value is None else validate_int(value, "repeat", minimum=0)
        return self

    def interval(self, value: Any = NOT_SET) -> Any:
        """Seconds between repetitions."""
        if value is NOT_SET:
            return self._data["interval"]
        self._data["interval"] = (
            None if value is None else validate_int(value, "interval", minimum=0)
        )
        return self

    def attach(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["attach"]
        self._data["attach"] = _validate_attachment(value)
        return self

    def description(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["description"]
        self._data["description"] = validate_text(value)
        return self

    def render_lines(self) -> list[str]:
        """VALARM block as unfolded content lines."""
        alarm_type = self._data["type"]
        if alarm_type is None:
            raise ICalRenderError("No value for `type` in Alarm given!", field="alarm.type")

        if self._data["repeat"] and not self._data["interval"]:
            raise ICalRenderError(
                "`interval` is required when `repeat` is set on an Alarm", field="alarm.interval"
            )

        lines = ["BEGIN:VALARM"]

        trigger = self._data["trigger"]
        if isinstance(trigger, datetime):
            lines.append(f"TRIGGER;VALUE=DATE-TIME:{format_utc(trigger)}")
        else:
            lines.append(f"TRIGGER:{format_duration(trigger)}")

        if self._data["repeat"]:
            lines.append(f"REPEAT:{self._data['repeat']}")
            lines.append(f"DURATION:{format_duration(self._data['interval'])}")

        lines.append(f"ACTION:{alarm_type.value.upper()}")

        description = self._data["description"]
        if alarm_type is AlarmType.DISPLAY and not description:
            description = self._parent.summary()
        if description:
            lines.append(f"DESCRIPTION:{escape(description)}")

        attachment: Optional[Attachment] = self._data["attach"]
        if attachment is not None:
            if attachment.mime:
                lines.append(f"ATTACH;FMTTYPE={attachment.mime}:{attachment.uri}")
            else:
                lines.append(f"ATTACH;VALUE=URI:{attachment.uri}")

        lines.append("END:VALARM")
        return lines

    def to_json(self) -> dict[str, Any]:
        trigger = self.trigger()
        attachment: Optional[Attachment] = self._data["attach"]
        data: dict[str, Any] = {
            "type": self._data["type"].value if self._data["type"] else None,
            "trigger": to_iso(trigger) if isinstance(trigger, datetime) else trigger,
            "repeat": self._data["repeat"],
            "interval": self._data["interval"],
            "attach": attachment.model_dump() if attachment else None,
            "description": self._data["description"],
        }
        data.update(self._extra_json())
        return data


def _validate_trigger(value: Any, field: str) -> Trigger:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return validate_int(value, field)

    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)

    try:
        return validate_datetime(value, field)
    except ICalValidationError:
        raise validation_error(
            field, f"`{field}` must be a number of seconds or a date, got {value!r}"
        ) from None


def _validate_attachment(value: Any) -> Optional[Attachment]:
    if value is None or isinstance(value, Attachment):
        return value

    if isinstance(value, str):
        return Attachment(uri=value)

    if isinstance(value, dict):
        if not value.get("uri"):
            raise validation_error("attach.uri", "`attach.uri` is empty!")
        mime = value.get("mime")
        return Attachment(uri=str(value["uri"]), mime=str(mime) if mime else None)

    raise validation_error("attach", f"`attach` must be a URI string or an object, got {value!r}")
