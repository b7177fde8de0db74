"""Event attendee (ATTENDEE property)."""

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from .base import NOT_SET, ICalComponent, load_snapshot
from .escaping import quote_param
from .exceptions import ICalRenderError
from .models import AttendeeRole, AttendeeStatus, AttendeeType
from .validators import (
    parse_mailbox,
    validate_enum,
    validate_optional_enum,
    validate_text,
    validation_error,
)

if TYPE_CHECKING:
    from .event import Event

logger = logging.getLogger(__name__)

Delegate = Union["Attendee", str]


class Attendee(ICalComponent):
    """Participant of an event.

    Accepts a snapshot, a JSON string, or the short form ``"Name <email>"``.
    A snapshot may carry ``delegates_to``/``delegates_from`` to create the
    delegate attendee in the same event.
    """

    _kind = "attendee"
    _attributes = (
        "name",
        "email",
        "role",
        "status",
        "type",
        "rsvp",
        "delegated_to",
        "delegated_from",
    )
    _actions = ("delegates_to", "delegates_from")
    _aliases = {
        "delegatedTo": "delegated_to",
        "delegatedFrom": "delegated_from",
        "delegatesTo": "delegates_to",
        "delegatesFrom": "delegates_from",
    }
    _parent_role = "event"

    def __init__(self, data: Any = None, event: "Event" = None) -> None:
        super().__init__(data, event)

    def _defaults(self) -> dict[str, Any]:
        return {
            "name": None,
            "email": None,
            "role": AttendeeRole.REQUIRED,
            "status": AttendeeStatus.NEEDS_ACTION,
            "type": None,
            "rsvp": None,
            "delegated_to": None,
            "delegated_from": None,
        }

    def _coerce(self, data: Any) -> dict[str, Any]:
        if isinstance(data, str) and not data.lstrip().startswith("{"):
            name, email = parse_mailbox(data, "attendee")
            return {"name": name, "email": email}
        if data is not None and not isinstance(data, (str, bytes, dict)):
            raise validation_error(
                "attendee", f"`attendee` needs to be a valid formed string or an object, got {data!r}"
            )
        return load_snapshot(data, self._kind)

    def name(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["name"]
        self._data["name"] = validate_text(value)
        return self

    def email(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["email"]
        self._data["email"] = validate_text(value)
        return self

    def role(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["role"]
        self._data["role"] = validate_enum(value, AttendeeRole, "role")
        return self

    def status(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["status"]
        self._data["status"] = validate_optional_enum(value, AttendeeStatus, "status")
        return self

    def type(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["type"]
        self._data["type"] = validate_optional_enum(value, AttendeeType, "type")
        return self

    def rsvp(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["rsvp"]
        self._data["rsvp"] = None if value is None else bool(value)
        return self

    def delegated_to(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["delegated_to"]
        self._data["delegated_to"] = _validate_delegate(value, "delegated_to")
        return self

    def delegated_from(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["delegated_from"]
        self._data["delegated_from"] = _validate_delegate(value, "delegated_from")
        return self

    def delegates_to(self, value: Any) -> "Attendee":
        """Delegate this attendee's participation.

        Creates (or adopts) the delegate in the same event, marks this
        attendee as DELEGATED and returns the delegate.
        """
        delegate = self._parent.create_attendee(value)
        delegate.delegated_from(self)
        self.delegated_to(delegate)
        self.status(AttendeeStatus.DELEGATED)
        logger.debug("Attendee %s delegates to %s", self._data["email"], delegate.email())
        return delegate

    def delegates_from(self, value: Any) -> "Attendee":
        """Record that this attendee was delegated by another one, which is returned."""
        delegator = self._parent.create_attendee(value)
        delegator.delegated_to(self)
        delegator.status(AttendeeStatus.DELEGATED)
        self.delegated_from(delegator)
        return delegator

    def render(self) -> str:
        """ATTENDEE content line (unfolded)."""
        email = self._data["email"]
        if not email:
            raise ICalRenderError(
                "No value for `email` in Attendee given!", field="attendee.email"
            )

        line = f"ATTENDEE;ROLE={self._data['role'].value}"
        if self._data["status"] is not None:
            line += f";PARTSTAT={self._data['status'].value}"
        if self._data["type"] is not None:
            line += f";CUTYPE={self._data['type'].value}"
        if self._data["rsvp"]:
            line += ";RSVP=TRUE"
        if self._data["delegated_to"] is not None:
            line += ";DELEGATED-TO=" + quote_param(f"mailto:{_email_of(self._data['delegated_to'])}")
        if self._data["delegated_from"] is not None:
            line += ";DELEGATED-FROM=" + quote_param(
                f"mailto:{_email_of(self._data['delegated_from'])}"
            )
        if self._data["name"]:
            line += f";CN={quote_param(self._data['name'])}"

        return f"{line}:MAILTO:{email}"

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self._data["name"],
            "email": self._data["email"],
            "role": self._data["role"].value,
            "status": self._data["status"].value if self._data["status"] else None,
            "type": self._data["type"].value if self._data["type"] else None,
            "rsvp": self._data["rsvp"],
            "delegated_to": _email_of(self._data["delegated_to"]),
            "delegated_from": _email_of(self._data["delegated_from"]),
        }
        data.update(self._extra_json())
        return data


def _email_of(delegate: Optional[Delegate]) -> Optional[str]:
    if isinstance(delegate, Attendee):
        return delegate.email()
    return delegate


def _validate_delegate(value: Any, field: str) -> Optional[Delegate]:
    """Accept an attendee, an email address, a short form or a mapping with ``email``."""
    if value is None or isinstance(value, Attendee):
        return value

    if isinstance(value, str):
        if "<" in value:
            return parse_mailbox(value, field)[1]
        return value.strip()

    if isinstance(value, dict) and value.get("email"):
        return str(value["email"])

    raise validation_error(field, f"`{field}` must be an Attendee or an email address, got {value!r}")
