import logging
from dataclasses import dataclass
from datetime import date, datetime, time

from agenda.core.ids import new_id
from agenda.models.appointment import Appointment, AppointmentCreate
from agenda.services.calendar_service import (
    WEEKDAY_LABELS,
    duration_hours,
    format_date,
    parse_date,
    shift_weeks,
    week_days,
    week_end,
    week_start,
)
from agenda.services.holiday_service import holiday_name
from agenda.services.replication_service import project_week
from agenda.services.slot_service import FreeSlot, find_free_slot
from agenda.services.state import AgendaError, AgendaState, CommandResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DaySummary:
    date: date
    weekday: str
    holiday: str | None
    appointments: tuple[Appointment, ...]
    total_hours: float


@dataclass(frozen=True)
class WeekOverview:
    week_start: date
    week_end: date
    days: tuple[DaySummary, ...]
    total_hours: float

    @property
    def can_copy(self) -> bool:
        """Copying into a week is only offered while it is empty."""
        return not any(day.appointments for day in self.days)

    @property
    def can_delete(self) -> bool:
        return not self.can_copy


def _hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def appointments_in_week(state: AgendaState, week: date | datetime | str) -> list[Appointment]:
    start, end = format_date(week_start(week)), format_date(week_end(week))
    selected = [a for a in state.appointments if start <= a.date <= end]
    return sorted(selected, key=lambda a: (a.date, a.start_time))


def appointments_on_day(state: AgendaState, day: date | datetime | str) -> list[Appointment]:
    day_str = format_date(parse_date(day))
    return sorted((a for a in state.appointments if a.date == day_str), key=lambda a: a.start_time)


def week_overview(state: AgendaState, week: date | datetime | str) -> WeekOverview:
    days = []
    for label, day in zip(WEEKDAY_LABELS, week_days(week)):
        day_appointments = tuple(appointments_on_day(state, day))
        days.append(
            DaySummary(
                date=day,
                weekday=label,
                holiday=holiday_name(day),
                appointments=day_appointments,
                total_hours=sum(a.duration for a in day_appointments),
            )
        )
    return WeekOverview(
        week_start=week_start(week),
        week_end=week_end(week),
        days=tuple(days),
        total_hours=sum(day.total_hours for day in days),
    )


def save_appointment(
    state: AgendaState,
    data: AppointmentCreate,
    appointment_id: str | None = None,
) -> tuple[AgendaState, CommandResult]:
    """Create (no id) or update (existing id) an appointment; duration is always recomputed."""
    if data.end_time <= data.start_time:
        return state, CommandResult.failure(
            AgendaError.INVALID_TIME_RANGE,
            "L'orario di fine deve essere successivo a quello di inizio.",
        )

    start, end = _hhmm(data.start_time), _hhmm(data.end_time)
    fields = dict(
        date=format_date(data.date),
        start_time=start,
        end_time=end,
        type=data.type,
        patient_id=data.patient_id,
        notes=data.notes,
        duration=duration_hours(start, end),
    )

    if appointment_id is None:
        appointment = Appointment(id=new_id(), **fields)
        logger.info("Appointment created: %s %s-%s (%s)", appointment.date, start, end, appointment.id)
        return (
            state.with_appointments([*state.appointments, appointment]),
            CommandResult.success("Appuntamento salvato!", [appointment.id]),
        )

    if state.find_appointment(appointment_id) is None:
        return state, CommandResult.failure(AgendaError.NOT_FOUND, "Appuntamento non trovato.")
    updated = Appointment(id=appointment_id, **fields)
    logger.info("Appointment updated: %s %s-%s (%s)", updated.date, start, end, appointment_id)
    return (
        state.with_appointments(updated if a.id == appointment_id else a for a in state.appointments),
        CommandResult.success("Appuntamento aggiornato!", [appointment_id]),
    )


def delete_appointment(state: AgendaState, appointment_id: str) -> tuple[AgendaState, CommandResult]:
    if state.find_appointment(appointment_id) is None:
        return state, CommandResult.failure(AgendaError.NOT_FOUND, "Appuntamento non trovato.")
    logger.info("Appointment deleted: %s", appointment_id)
    return (
        state.with_appointments(a for a in state.appointments if a.id != appointment_id),
        CommandResult.success("Appuntamento eliminato.", [appointment_id]),
    )


def delete_week(state: AgendaState, week: date | datetime | str) -> tuple[AgendaState, CommandResult]:
    doomed = {a.id for a in appointments_in_week(state, week)}
    if not doomed:
        return state, CommandResult.failure(
            AgendaError.EMPTY_WEEK,
            "Nessun appuntamento da eliminare in questa settimana.",
        )
    logger.info("Deleting %d appointment(s) in week of %s", len(doomed), week_start(week))
    return (
        state.with_appointments(a for a in state.appointments if a.id not in doomed),
        CommandResult.success("Appuntamenti della settimana eliminati.", sorted(doomed)),
    )


def copy_week(
    state: AgendaState,
    target_week: date | datetime | str,
    weeks_ago: int = 1,
) -> tuple[AgendaState, CommandResult]:
    """Replicate the week `weeks_ago` weeks before target_week onto target_week."""
    if weeks_ago < 1:
        raise ValueError(f"weeks_ago must be at least 1, got {weeks_ago}")

    target_start = week_start(target_week)
    if appointments_in_week(state, target_start):
        return state, CommandResult.failure(
            AgendaError.TARGET_NOT_EMPTY,
            "La settimana di destinazione contiene già appuntamenti.",
        )

    source_start = shift_weeks(target_start, -weeks_ago)
    source = appointments_in_week(state, source_start)
    if not source:
        when = "la settimana scorsa" if weeks_ago == 1 else f"{weeks_ago} settimane fa"
        return state, CommandResult.failure(AgendaError.EMPTY_SOURCE, f"Nessun appuntamento trovato {when}.")

    copies = project_week(source, source_start, target_start)
    logger.info("Copied %d appointment(s) from week of %s to week of %s", len(copies), source_start, target_start)
    return (
        state.with_appointments([*state.appointments, *copies]),
        CommandResult.success(f"{len(copies)} appuntamenti copiati con successo!", [a.id for a in copies]),
    )


def suggest_slot(
    state: AgendaState,
    day: date | datetime | str,
    duration_minutes: int | None = None,
) -> tuple[FreeSlot | None, CommandResult]:
    slot = find_free_slot(day, appointments_on_day(state, day), duration_minutes)
    if slot is None:
        return None, CommandResult.failure(AgendaError.NO_SLOT, "Non ho trovato uno slot libero.")
    return slot, CommandResult.success(f"Slot suggerito: {slot.start}-{slot.end}")
