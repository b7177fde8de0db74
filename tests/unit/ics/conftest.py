"""Shared fixtures for iCalendar entity and serializer tests.

Calendars built here use a fixed clock and a counting id source so rendered
output is deterministic.
"""

import itertools
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from icalbuilder.ics import Calendar, Event

FIXED_NOW = datetime(2013, 10, 4, 23, 34, 53, tzinfo=timezone.utc)

SEBBO_CALENDAR = {
    "domain": "sebbo.net",
    "prod_id": "//sebbo.net//ical-generator.tests//EN",
}


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns 2013-10-04T23:34:53Z."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Id source yielding "1", "2", ... per test."""
    counter = itertools.count(1)
    return lambda: str(next(counter))


@pytest.fixture
def calendar(fixed_clock, id_factory) -> Calendar:
    """Empty calendar with default settings."""
    return Calendar(clock=fixed_clock, id_factory=id_factory)


@pytest.fixture
def make_calendar(fixed_clock, id_factory) -> Callable[..., Calendar]:
    """Factory for calendars sharing the fixed clock and id source."""

    def _make(data: Any = None) -> Calendar:
        return Calendar(data, clock=fixed_clock, id_factory=id_factory)

    return _make


@pytest.fixture
def sebbo_calendar(make_calendar) -> Calendar:
    """Calendar with a fixed domain and product id for full-document tests."""
    return make_calendar(dict(SEBBO_CALENDAR))


@pytest.fixture
def event(calendar) -> Event:
    """Minimal renderable event."""
    return calendar.create_event({"start": "2013-10-04T22:39:30Z", "summary": "Example Event"})
