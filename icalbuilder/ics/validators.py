"""Field validators shared by all entities.

Every validator takes the raw value and the public field name, returns the
normalized value and raises ``ICalValidationError`` naming the field when the
value is rejected. Nothing is stored here; entities store only what a
validator returned, so a rejected value never touches existing state.
"""

import logging
import math
import re
from collections.abc import Callable, Iterable
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional, TypeVar

from ..timezone import UTC, TimezoneError, ensure_timezone_aware, is_valid_timezone, parse_datetime
from .exceptions import ICalValidationError
from .models import Organizer, Weekday

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
T = TypeVar("T")

MAILBOX_PATTERN = re.compile(r"^(.+?)\s*<([^>]+)>$")


def validation_error(field: str, message: str) -> ICalValidationError:
    """Build a field-named validation error and log it."""
    logger.debug("Rejected value for %s: %s", field, message)
    return ICalValidationError(message, field=field)


def validate_datetime(value: Any, field: str) -> datetime:
    """Normalize a date-like value to an aware datetime.

    Accepts an ISO-8601 string, a ``date``, a naive ``datetime`` (read as
    UTC) or an aware ``datetime``, which is kept as is.
    """
    if isinstance(value, datetime):
        return ensure_timezone_aware(value)

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=UTC)

    if isinstance(value, str):
        try:
            return parse_datetime(value)
        except TimezoneError:
            raise validation_error(field, f"`{field}` has to be a valid date, got {value!r}") from None

    raise validation_error(
        field,
        f"`{field}` must be a datetime, date or ISO-8601 string, got {type(value).__name__}",
    )


def validate_optional_datetime(value: Any, field: str) -> Optional[datetime]:
    """Like ``validate_datetime`` but ``None`` clears the value."""
    if value is None:
        return None
    return validate_datetime(value, field)


def validate_timestamp(value: Any, field: str) -> datetime:
    """Like ``validate_datetime`` but also accepts epoch milliseconds."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            if not math.isfinite(value):
                raise ValueError(value)
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            raise validation_error(
                field, f"`{field}` has to be a valid timestamp, got {value!r}"
            ) from None
    return validate_datetime(value, field)


def validate_int(value: Any, field: str, minimum: Optional[int] = None) -> int:
    """Normalize an integer-like value.

    Integers, integral finite floats and numeric strings are accepted. ``0``
    is a regular value.
    """
    number: Optional[int] = None

    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            number = None

    if number is None:
        raise validation_error(field, f"`{field}` must be a finite integer, got {value!r}")

    if minimum is not None and number < minimum:
        raise validation_error(field, f"`{field}` must be at least {minimum}, got {number}")

    return number


def validate_enum(value: Any, enum_cls: type[E], field: str) -> E:
    """Match a value case-insensitively against an enumeration."""
    if isinstance(value, enum_cls):
        return value

    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member

    allowed = ", ".join(member.value for member in enum_cls)
    raise validation_error(field, f"`{field}` must be one of the following: {allowed}")


def validate_optional_enum(value: Any, enum_cls: type[E], field: str) -> Optional[E]:
    """Like ``validate_enum`` but ``None`` clears the value."""
    if value is None:
        return None
    return validate_enum(value, enum_cls, field)


def validate_text(value: Any, default: Optional[str] = None) -> Optional[str]:
    """Normalize a free-text value; ``None`` resets it to ``default``."""
    if value is None:
        return default
    return str(value)


def validate_timezone(value: Any, field: str) -> Optional[str]:
    """Check a zone name with the timezone service; ``None`` clears it."""
    if value is None:
        return None
    if not isinstance(value, str) or not is_valid_timezone(value):
        raise validation_error(field, f"`{field}` must be a valid timezone name, got {value!r}")
    return value


def validate_seconds(value: Any, field: str) -> int:
    """Normalize a non-negative duration given as seconds or ``timedelta``."""
    if isinstance(value, timedelta):
        value = int(value.total_seconds())
    return validate_int(value, field, minimum=0)


def as_list(value: Any) -> list[Any]:
    """Wrap a single value in a list; sequences become lists."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, dict)):
        return list(value)
    return [value]


def validate_list(value: Any, field: str, element: Callable[[Any], T]) -> list[T]:
    """Validate every element of a list-valued field.

    ``element`` returns the normalized element or raises ``ValueError``; the
    first failure aborts and is reported with the offending value.
    """
    result = []
    for item in as_list(value):
        try:
            result.append(element(item))
        except ValueError:
            raise validation_error(
                field, f"`{field}` contains invalid value `{_report(item)}`"
            ) from None
    return result


def _report(item: Any) -> str:
    if isinstance(item, str):
        return item.upper()
    if isinstance(item, float) and math.isinf(item):
        return "INFINITY" if item > 0 else "-INFINITY"
    return str(item).upper()


def _weekday(item: Any) -> str:
    if not isinstance(item, str):
        raise ValueError(item)
    return Weekday(item.strip().upper()).value


def validate_weekdays(value: Any, field: str) -> list[str]:
    """Normalize a list of two-letter weekday codes to upper case."""
    return validate_list(value, field, _weekday)


def validate_int_range_list(value: Any, field: str, low: int, high: int) -> list[int]:
    """Validate a list of integers within ``low..high``."""

    def element(item: Any) -> int:
        number = validate_int(item, field)
        if not low <= number <= high:
            raise ValueError(item)
        return number

    return validate_list(value, field, element)


def validate_datetime_list(value: Any, field: str) -> list[datetime]:
    """Validate a list of date-like values; the first bad one raises its own error."""
    return [validate_datetime(item, field) for item in as_list(value)]


def parse_mailbox(value: str, field: str) -> tuple[str, str]:
    """Split a ``"Name <email>"`` short form into name and email."""
    match = MAILBOX_PATTERN.match(value.strip())
    if not match:
        raise validation_error(
            field, f"`{field}` isn't formatted correctly. See README for details: {value!r}"
        )
    return match.group(1).strip(), match.group(2).strip()


def validate_organizer(value: Any, field: str = "organizer") -> Optional[Organizer]:
    """Normalize an organizer given as object, mapping or short-form string."""
    if value is None:
        return None

    if isinstance(value, Organizer):
        return value

    if isinstance(value, str):
        name, email = parse_mailbox(value, field)
        return Organizer(name=name, email=email)

    if isinstance(value, dict):
        for key in ("name", "email"):
            if not value.get(key):
                raise validation_error(f"{field}.{key}", f"`{field}.{key}` is empty!")
        return Organizer(name=str(value["name"]), email=str(value["email"]))

    raise validation_error(
        field, f"`{field}` needs to be a valid formed string or an object, got {value!r}"
    )
