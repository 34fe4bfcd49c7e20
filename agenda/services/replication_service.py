from collections.abc import Iterable
from datetime import date, datetime

from agenda.core.ids import new_id
from agenda.models.appointment import Appointment
from agenda.services.calendar_service import format_date, parse_date


def project_week(
    source_appointments: Iterable[Appointment],
    source_week_start: date | datetime | str,
    target_week_start: date | datetime | str,
) -> list[Appointment]:
    """New appointments on the target week, same day offsets, fresh ids.

    Target occupancy is not checked here; callers only offer this for an
    empty target week.
    """
    source_start = parse_date(source_week_start)
    target_start = parse_date(target_week_start)
    projected: list[Appointment] = []
    for source in source_appointments:
        # Calendar-date arithmetic: whole days, unaffected by DST shifts
        offset = parse_date(source.date) - source_start
        data = source.model_dump()
        data.update(id=new_id(), date=format_date(target_start + offset))
        projected.append(Appointment(**data))
    return projected
