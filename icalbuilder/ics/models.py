"""Enumerations and small value models for the iCalendar builder."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Frequency(str, Enum):
    """Recurrence frequencies (RRULE FREQ)."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Weekday(str, Enum):
    """Two-letter weekday codes used by BYDAY."""

    SU = "SU"
    MO = "MO"
    TU = "TU"
    WE = "WE"
    TH = "TH"
    FR = "FR"
    SA = "SA"


class EventStatus(str, Enum):
    """Event STATUS values."""

    CONFIRMED = "CONFIRMED"
    TENTATIVE = "TENTATIVE"
    CANCELLED = "CANCELLED"


class BusyStatus(str, Enum):
    """Outlook busy status (X-MICROSOFT-CDO-BUSYSTATUS) values."""

    FREE = "FREE"
    TENTATIVE = "TENTATIVE"
    BUSY = "BUSY"
    OOF = "OOF"


class CalendarMethod(str, Enum):
    """iTIP methods for the calendar METHOD property."""

    PUBLISH = "PUBLISH"
    REQUEST = "REQUEST"
    REPLY = "REPLY"
    ADD = "ADD"
    CANCEL = "CANCEL"
    REFRESH = "REFRESH"
    COUNTER = "COUNTER"
    DECLINECOUNTER = "DECLINECOUNTER"


class AttendeeRole(str, Enum):
    """Attendee ROLE parameter values."""

    CHAIR = "CHAIR"
    REQUIRED = "REQ-PARTICIPANT"
    OPTIONAL = "OPT-PARTICIPANT"
    NON_PARTICIPANT = "NON-PARTICIPANT"


class AttendeeStatus(str, Enum):
    """Attendee PARTSTAT parameter values."""

    ACCEPTED = "ACCEPTED"
    TENTATIVE = "TENTATIVE"
    DECLINED = "DECLINED"
    DELEGATED = "DELEGATED"
    NEEDS_ACTION = "NEEDS-ACTION"


class AttendeeType(str, Enum):
    """Attendee CUTYPE parameter values."""

    INDIVIDUAL = "INDIVIDUAL"
    GROUP = "GROUP"
    RESOURCE = "RESOURCE"
    ROOM = "ROOM"
    UNKNOWN = "UNKNOWN"


class AlarmType(str, Enum):
    """Alarm types; rendered upper-case as the ACTION property."""

    DISPLAY = "display"
    AUDIO = "audio"


class Organizer(BaseModel):
    """Event organizer: a name and an email address."""

    name: str = Field(..., description="Display name, rendered as the CN parameter")
    email: str = Field(..., description="Email address, rendered as a mailto URI")

    model_config = ConfigDict(frozen=True)


class Attachment(BaseModel):
    """Alarm attachment (ATTACH property)."""

    uri: str = Field(..., description="Location of the attached resource")
    mime: Optional[str] = Field(default=None, description="Optional FMTTYPE parameter")

    model_config = ConfigDict(frozen=True)


class ProductId(BaseModel):
    """Calendar product identifier, rendered as ``PRODID:-//company//product//LANG``."""

    company: str = Field(..., description="Company or author of the generating product")
    product: str = Field(..., description="Product name")
    language: str = Field(default="EN", description="Language code")

    model_config = ConfigDict(frozen=True)

    def render(self) -> str:
        return f"-//{self.company}//{self.product}//{self.language}"
