"""Monthly availability of an artist, as open hourly slots per working day."""

import calendar
import datetime as dt
import logging
from typing import Dict, List

from models import as_utc
from stores import BookingStore

logger = logging.getLogger(__name__)

# Studio hours: slots start every SLOT_LENGTH_MINUTES in [OPEN_HOUR, CLOSE_HOUR), UTC
OPEN_HOUR = 10
CLOSE_HOUR = 18
SLOT_LENGTH_MINUTES = 60
WORKING_WEEKDAYS = frozenset(
    {
        calendar.MONDAY,
        calendar.TUESDAY,
        calendar.WEDNESDAY,
        calendar.THURSDAY,
        calendar.FRIDAY,
        calendar.SATURDAY,
    }
)


def month_range(year: int, month: int):
    """Return the half-open UTC range [first instant of month, first instant of next month)."""
    start = dt.datetime(year, month, 1, tzinfo=dt.timezone.utc)
    if month == 12:
        end = dt.datetime(year + 1, 1, 1, tzinfo=dt.timezone.utc)
    else:
        end = dt.datetime(year, month + 1, 1, tzinfo=dt.timezone.utc)
    return start, end


def iso_instant(value: dt.datetime) -> str:
    return value.astimezone(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def day_slots(day: dt.date) -> List[dt.datetime]:
    """Candidate slot starts for a single day, ascending."""
    opening = dt.datetime(day.year, day.month, day.day, OPEN_HOUR, tzinfo=dt.timezone.utc)
    closing = dt.datetime(day.year, day.month, day.day, CLOSE_HOUR, tzinfo=dt.timezone.utc)
    step = dt.timedelta(minutes=SLOT_LENGTH_MINUTES)

    slots = []
    current = opening
    while current < closing:
        slots.append(current)
        current += step
    return slots


async def get_availability_by_day(
    store: BookingStore, artist_id: int, year: int, month: int
) -> Dict[str, List[str]]:
    """Map each working day of the month (YYYY-MM-DD) to its open slots.

    Days without any open slot, whether closed or fully booked, are left out.
    """
    start, end = month_range(year, month)

    # Single query, then O(1) lookups per candidate slot; keys are exact
    # aware instants, the same equality the conflict check uses
    booked = {
        as_utc(when)
        for when in await store.list_datetimes_in_range(artist_id, start, end)
    }

    days: Dict[str, List[str]] = {}
    day = start.date()
    while day < end.date():
        if day.weekday() in WORKING_WEEKDAYS:
            slots = []
            for slot in day_slots(day):
                if slot not in booked:
                    slots.append(iso_instant(slot))
            if slots:
                days[day.isoformat()] = slots
        day += dt.timedelta(days=1)

    logger.debug(
        "Availability for artist %s in %04d-%02d: %d open days, %d booked slots",
        artist_id, year, month, len(days), len(booked),
    )
    return days
