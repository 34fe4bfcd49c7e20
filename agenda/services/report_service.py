"""Monthly hour totals by category and by patient."""

from collections.abc import Iterable

from pydantic import BaseModel

from agenda.models.appointment import Appointment, AppointmentType
from agenda.models.patient import Patient
from agenda.services.calendar_service import parse_date
from agenda.services.patient_service import display_name


class MonthReport(BaseModel):
    year: int
    month: int  # 1-12
    by_category: dict[AppointmentType, float]
    by_patient: dict[str, float]  # ordered by display name
    total_hours: float
    appointment_count: int

    @property
    def is_empty(self) -> bool:
        """No appointments at all, which is not the same as every category at zero."""
        return self.appointment_count == 0


def appointments_in_month(appointments: Iterable[Appointment], year: int, month: int) -> list[Appointment]:
    result = []
    for a in appointments:
        # Stored dates are local calendar dates; compare fields, never instants
        d = parse_date(a.date)
        if d.year == year and d.month == month:
            result.append(a)
    return result


def aggregate_month(
    appointments: Iterable[Appointment],
    patients: Iterable[Patient],
    year: int,
    month: int,
) -> MonthReport:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")

    selected = appointments_in_month(appointments, year, month)
    patients_by_id = {p.id: p for p in patients}

    by_category = {category: 0.0 for category in AppointmentType}
    by_patient: dict[str, float] = {}
    total = 0.0
    for a in selected:
        by_category[AppointmentType(a.type)] += a.duration
        name = display_name(patients_by_id.get(a.patient_id))
        by_patient[name] = by_patient.get(name, 0.0) + a.duration
        total += a.duration

    return MonthReport(
        year=year,
        month=month,
        by_category=by_category,
        by_patient={name: by_patient[name] for name in sorted(by_patient, key=lambda n: (n.casefold(), n))},
        total_hours=total,
        appointment_count=len(selected),
    )
