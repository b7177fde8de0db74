"""Calendar (VCALENDAR document) and its serializer."""

import logging
import re
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional

from ..config import IcalBuilderSettings, get_settings
from ..timezone import now_utc
from .base import NOT_SET, ICalComponent
from .escaping import escape, fold_lines
from .event import Event
from .formatting import format_duration
from .models import CalendarMethod, ProductId
from .validators import (
    as_list,
    validate_optional_enum,
    validate_seconds,
    validate_text,
    validate_timezone,
    validation_error,
)

logger = logging.getLogger(__name__)

PROD_ID_PATTERN = re.compile(r"^-?//(.+)//(.+)//([A-Za-z]{1,4})$")


def random_id() -> str:
    """Default event id source."""
    return uuid.uuid4().hex


class Calendar(ICalComponent):
    """Root of the entity tree: calendar properties plus an ordered event list.

    Defaults for ``domain``, ``prod_id`` and ``timezone`` come from the
    settings. ``clock`` and ``id_factory`` are shared with every event of the
    calendar and supply the default ``stamp`` and ``id``.

    Example:
        >>> cal = Calendar({"domain": "example.com", "name": "Team"})
        >>> cal.create_event({"start": "2013-10-04T22:39:30Z", "summary": "Standup"})
        >>> text = cal.to_string()
    """

    _kind = "calendar"
    _attributes = (
        "prod_id",
        "domain",
        "method",
        "name",
        "description",
        "timezone",
        "url",
        "scale",
        "ttl",
        "events",
    )
    _aliases = {"prodId": "prod_id"}

    def __init__(
        self,
        data: Any = None,
        *,
        settings: Optional[IcalBuilderSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or now_utc
        self.id_factory = id_factory or random_id
        super().__init__(data)

    def _defaults(self) -> dict[str, Any]:
        return {
            "prod_id": _validate_prod_id(self.settings.prod_id),
            "domain": self.settings.domain or None,
            "method": None,
            "name": None,
            "description": None,
            "timezone": validate_timezone(self.settings.timezone, "timezone"),
            "url": None,
            "scale": None,
            "ttl": None,
            "events": [],
        }

    def prod_id(self, value: Any = NOT_SET) -> Any:
        """Product identifier as ``//company//product//LANG`` or a mapping."""
        if value is NOT_SET:
            return self._data["prod_id"]
        self._data["prod_id"] = _validate_prod_id(value)
        return self

    def domain(self, value: Any = NOT_SET) -> Any:
        """Domain appended to event UIDs; ``None`` or ``""`` removes it."""
        if value is NOT_SET:
            return self._data["domain"]
        self._data["domain"] = validate_text(value) or None
        return self

    def method(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["method"]
        self._data["method"] = validate_optional_enum(value, CalendarMethod, "method")
        return self

    def name(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["name"]
        self._data["name"] = validate_text(value)
        return self

    def description(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["description"]
        self._data["description"] = validate_text(value)
        return self

    def timezone(self, value: Any = NOT_SET) -> Any:
        """Calendar timezone, inherited by events without their own."""
        if value is NOT_SET:
            return self._data["timezone"]
        self._data["timezone"] = validate_timezone(value, "timezone")
        return self

    def url(self, value: Any = NOT_SET) -> Any:
        if value is NOT_SET:
            return self._data["url"]
        self._data["url"] = validate_text(value)
        return self

    def scale(self, value: Any = NOT_SET) -> Any:
        """Calendar scale (CALSCALE), stored upper-case."""
        if value is NOT_SET:
            return self._data["scale"]
        self._data["scale"] = None if value is None else str(value).upper()
        return self

    def ttl(self, value: Any = NOT_SET) -> Any:
        """Refresh interval in seconds; accepts a ``timedelta``."""
        if value is NOT_SET:
            return self._data["ttl"]
        self._data["ttl"] = None if value is None else validate_seconds(value, "ttl")
        return self

    def create_event(self, data: Any = None) -> Event:
        """Append an event built from ``data`` (or ``data`` itself) and return it."""
        event = data if isinstance(data, Event) else Event(data, self)
        self._data["events"].append(event)
        return event

    def events(self, value: Any = NOT_SET) -> Any:
        """Events in order; called with a list (or one event) appends them."""
        if value is NOT_SET:
            return list(self._data["events"])
        for item in as_list(value):
            self.create_event(item)
        return self

    def clear(self) -> "Calendar":
        """Remove every event."""
        self._data["events"] = []
        return self

    def __len__(self) -> int:
        return len(self._data["events"])

    def render_lines(self) -> list[str]:
        """The whole document as unfolded content lines."""
        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{self._data['prod_id'].render()}",
        ]

        if self._data["url"]:
            lines.append(f"URL:{self._data['url']}")
        if self._data["scale"]:
            lines.append(f"CALSCALE:{self._data['scale']}")
        if self._data["method"] is not None:
            lines.append(f"METHOD:{self._data['method'].value}")
        if self._data["name"]:
            lines.append(f"NAME:{escape(self._data['name'])}")
            lines.append(f"X-WR-CALNAME:{escape(self._data['name'])}")
        if self._data["description"]:
            lines.append(f"X-WR-CALDESC:{escape(self._data['description'])}")
        if self._data["timezone"]:
            lines.append(f"TIMEZONE-ID:{self._data['timezone']}")
            lines.append(f"X-WR-TIMEZONE:{self._data['timezone']}")
        if self._data["ttl"]:
            ttl = format_duration(self._data["ttl"])
            lines.append(f"REFRESH-INTERVAL;VALUE=DURATION:{ttl}")
            lines.append(f"X-PUBLISHED-TTL:{ttl}")

        for event in self._data["events"]:
            lines.extend(event.render_lines())

        lines.append("END:VCALENDAR")
        return lines

    def to_string(self) -> str:
        """Render the calendar as folded, CRLF-terminated iCalendar text."""
        text = fold_lines(self.render_lines())
        logger.debug("Rendered calendar with %d events (%d bytes)", len(self), len(text))
        return text

    def __str__(self) -> str:
        return self.to_string()

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "prod_id": self._data["prod_id"].model_dump(),
            "domain": self._data["domain"],
            "method": self._data["method"].value if self._data["method"] else None,
            "name": self._data["name"],
            "description": self._data["description"],
            "timezone": self._data["timezone"],
            "url": self._data["url"],
            "scale": self._data["scale"],
            "ttl": self._data["ttl"],
            "events": [event.to_json() for event in self._data["events"]],
        }
        data.update(self._extra_json())
        return data


def _validate_prod_id(value: Any) -> ProductId:
    """Normalize a product id given as ``//company//product//LANG``, mapping or model."""
    if isinstance(value, ProductId):
        return value

    if isinstance(value, str):
        match = PROD_ID_PATTERN.match(value.strip())
        if not match:
            raise validation_error(
                "prod_id", f"`prod_id` needs to be a valid formed string, got {value!r}"
            )
        company, product, language = match.groups()
        return ProductId(company=company, product=product, language=language.upper())

    if isinstance(value, dict):
        for key in ("company", "product"):
            if not value.get(key):
                raise validation_error(f"prod_id.{key}", f"`prod_id.{key}` is empty!")
        return ProductId(
            company=str(value["company"]),
            product=str(value["product"]),
            language=str(value.get("language") or "EN").upper(),
        )

    raise validation_error(
        "prod_id", f"`prod_id` needs to be a valid formed string or an object, got {value!r}"
    )
