from dataclasses import dataclass, field, replace
from enum import Enum

from agenda.models.appointment import Appointment
from agenda.models.patient import Patient


class AgendaError(str, Enum):
    INVALID_TIME_RANGE = "invalid_time_range"
    NO_SLOT = "no_slot"
    EMPTY_SOURCE = "empty_source"
    TARGET_NOT_EMPTY = "target_not_empty"
    EMPTY_WEEK = "empty_week"
    NOT_FOUND = "not_found"
    MISSING_LAST_NAME = "missing_last_name"
    DUPLICATE_PATIENT = "duplicate_patient"
    PROTECTED_PATIENT = "protected_patient"


@dataclass(frozen=True)
class AgendaState:
    """Snapshot of both collections. Commands return a new snapshot, never mutate this one."""

    appointments: tuple[Appointment, ...] = ()
    patients: tuple[Patient, ...] = ()

    def with_appointments(self, appointments) -> "AgendaState":
        return replace(self, appointments=tuple(appointments))

    def with_patients(self, patients) -> "AgendaState":
        return replace(self, patients=tuple(patients))

    def find_appointment(self, appointment_id: str) -> Appointment | None:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def find_patient(self, patient_id: str) -> Patient | None:
        return next((p for p in self.patients if p.id == patient_id), None)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str
    error: AgendaError | None = None
    affected_ids: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, message: str, affected_ids=()) -> "CommandResult":
        return cls(ok=True, message=message, affected_ids=tuple(affected_ids))

    @classmethod
    def failure(cls, error: AgendaError, message: str) -> "CommandResult":
        return cls(ok=False, message=message, error=error)
