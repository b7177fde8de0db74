"""Repeating rule value and recurrence rule encoding."""

import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ICalValidationError
from .formatting import TimeMode, format_date, format_date_list_property, format_utc, to_iso
from .models import Frequency
from .validators import (
    validate_datetime,
    validate_datetime_list,
    validate_enum,
    validate_int,
    validate_int_range_list,
    validate_weekdays,
    validation_error,
)

logger = logging.getLogger(__name__)

FIELD = "repeating"


class RepeatingRule(BaseModel):
    """Recurrence of an event.

    Built from a mapping with the keys below (``byDay``, ``byMonth`` and
    ``byMonthDay`` are accepted as aliases). Every field except ``freq`` is
    optional and only rendered when set; ``None`` counts as unset. Unknown
    keys are kept and written back by ``to_json``.
    """

    freq: Frequency
    count: Optional[int] = None
    interval: Optional[int] = None
    until: Optional[datetime] = None
    by_day: Optional[list[str]] = Field(
        default=None, validation_alias=AliasChoices("by_day", "byDay")
    )
    by_month: Optional[list[int]] = Field(
        default=None, validation_alias=AliasChoices("by_month", "byMonth")
    )
    by_month_day: Optional[list[int]] = Field(
        default=None, validation_alias=AliasChoices("by_month_day", "byMonthDay")
    )
    exclude: Optional[list[datetime]] = None

    model_config = ConfigDict(extra="allow", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _require_freq(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise validation_error(FIELD, f"`{FIELD}` must be an object or null, got {data!r}")
        if data.get("freq") is None:
            raise validation_error(f"{FIELD}.freq", f"`{FIELD}.freq` is a mandatory item!")
        # an explicit None leaves the part unset
        return {key: value for key, value in data.items() if value is not None}

    @field_validator("freq", mode="before")
    @classmethod
    def _check_freq(cls, value: Any) -> Frequency:
        return validate_enum(value, Frequency, f"{FIELD}.freq")

    @field_validator("count", mode="before")
    @classmethod
    def _check_count(cls, value: Any) -> int:
        return validate_int(value, f"{FIELD}.count", minimum=0)

    @field_validator("interval", mode="before")
    @classmethod
    def _check_interval(cls, value: Any) -> int:
        return validate_int(value, f"{FIELD}.interval")

    @field_validator("until", mode="before")
    @classmethod
    def _check_until(cls, value: Any) -> datetime:
        return validate_datetime(value, f"{FIELD}.until")

    @field_validator("by_day", mode="before")
    @classmethod
    def _check_by_day(cls, value: Any) -> list[str]:
        return validate_weekdays(value, f"{FIELD}.by_day")

    @field_validator("by_month", mode="before")
    @classmethod
    def _check_by_month(cls, value: Any) -> list[int]:
        return validate_int_range_list(value, f"{FIELD}.by_month", 1, 12)

    @field_validator("by_month_day", mode="before")
    @classmethod
    def _check_by_month_day(cls, value: Any) -> list[int]:
        return validate_int_range_list(value, f"{FIELD}.by_month_day", 1, 31)

    @field_validator("exclude", mode="before")
    @classmethod
    def _check_exclude(cls, value: Any) -> list[datetime]:
        return validate_datetime_list(value, f"{FIELD}.exclude")

    def to_json(self) -> dict[str, Any]:
        """Snapshot with ISO-8601 dates; unset fields are left out."""
        data: dict[str, Any] = {"freq": self.freq.value}
        if self.count is not None:
            data["count"] = self.count
        if self.interval is not None:
            data["interval"] = self.interval
        if self.until is not None:
            data["until"] = to_iso(self.until)
        if self.by_day is not None:
            data["by_day"] = list(self.by_day)
        if self.by_month is not None:
            data["by_month"] = list(self.by_month)
        if self.by_month_day is not None:
            data["by_month_day"] = list(self.by_month_day)
        if self.exclude is not None:
            data["exclude"] = [to_iso(value) for value in self.exclude]
        if self.model_extra:
            data.update(self.model_extra)
        return data


def validate_repeating(value: Any) -> Optional[RepeatingRule]:
    """Normalize the ``repeating`` accessor input; ``None`` clears the rule."""
    if value is None or isinstance(value, RepeatingRule):
        return value

    try:
        return RepeatingRule.model_validate(value)
    except ValidationError as e:
        raise _unwrap(e) from None


def _unwrap(error: ValidationError) -> ICalValidationError:
    """Return the field-named error raised inside a rule validator."""
    details = error.errors()
    for detail in details:
        original = (detail.get("ctx") or {}).get("error")
        if isinstance(original, ICalValidationError):
            return original

    first = details[0]
    field = ".".join([FIELD, *(str(part) for part in first["loc"])])
    return validation_error(field, f"`{field}` {first['msg']}")


def encode_rrule(rule: RepeatingRule, mode: TimeMode, all_day: bool = False) -> str:
    """Encode a repeating rule as an ``RRULE`` content line.

    Parts are emitted in a fixed order: FREQ, COUNT, UNTIL, INTERVAL, BYDAY,
    BYMONTH, BYMONTHDAY.
    """
    parts = [f"FREQ={rule.freq.value}"]

    if rule.count is not None:
        parts.append(f"COUNT={rule.count}")

    if rule.until is not None:
        if all_day:
            until = format_date(rule.until, mode, date_only=True)
        elif mode.is_floating:
            until = format_date(rule.until, mode)
        else:
            until = format_utc(rule.until)
        parts.append(f"UNTIL={until}")

    if rule.interval is not None:
        parts.append(f"INTERVAL={rule.interval}")

    if rule.by_day:
        parts.append("BYDAY=" + ",".join(rule.by_day))

    if rule.by_month:
        parts.append("BYMONTH=" + ",".join(str(month) for month in rule.by_month))

    if rule.by_month_day:
        parts.append("BYMONTHDAY=" + ",".join(str(day) for day in rule.by_month_day))

    return "RRULE:" + ";".join(parts)


def encode_exdate(rule: RepeatingRule, mode: TimeMode, all_day: bool = False) -> Optional[str]:
    """Encode the excluded instants as one ``EXDATE`` content line, if any."""
    if not rule.exclude:
        return None
    return format_date_list_property("EXDATE", rule.exclude, mode, all_day)
