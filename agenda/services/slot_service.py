import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import NamedTuple

from pydantic import BaseModel

from agenda.core.config import settings
from agenda.models.appointment import Appointment
from agenda.services.calendar_service import (
    format_date,
    minutes_to_time,
    parse_date,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


class BusyInterval(NamedTuple):
    """Half-open [start, end) in minutes since midnight."""

    start: int
    end: int


class FreeSlot(BaseModel):
    start: str  # HH:MM
    end: str  # HH:MM


def busy_intervals_for_day(day: date | datetime | str, appointments: Iterable[Appointment]) -> list[BusyInterval]:
    """Appointments on day plus the fixed break, sorted by start."""
    day_str = format_date(parse_date(day))
    busy = [
        BusyInterval(time_to_minutes(a.start_time), time_to_minutes(a.end_time))
        for a in appointments
        if a.date == day_str
    ]
    busy.append(BusyInterval(time_to_minutes(settings.break_start), time_to_minutes(settings.break_end)))
    busy.sort(key=lambda b: b.start)
    return busy


def find_free_slot(
    day: date | datetime | str,
    appointments: Iterable[Appointment],
    duration_minutes: int | None = None,
) -> FreeSlot | None:
    """Earliest [t, t + duration) inside the working day that overlaps nothing busy.

    On a conflict the candidate jumps to the end of the first conflicting
    interval in start order, not the one that ends last.
    """
    duration = duration_minutes if duration_minutes is not None else settings.default_slot_minutes
    if duration <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration}")
    busy = busy_intervals_for_day(day, appointments)
    day_start = time_to_minutes(settings.day_start)
    day_end = time_to_minutes(settings.day_end)

    t = day_start
    while t + duration <= day_end:
        slot_end = t + duration
        conflict = next((b for b in busy if t < b.end and slot_end > b.start), None)
        if conflict is None:
            return FreeSlot(start=minutes_to_time(t), end=minutes_to_time(slot_end))
        t = conflict.end
    logger.debug("No %d-minute slot free on %s", duration, parse_date(day))
    return None
