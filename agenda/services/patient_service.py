import logging
from datetime import date

from agenda.core.config import settings
from agenda.core.ids import new_id
from agenda.models.patient import Patient, PatientCreate
from agenda.services.calendar_service import format_date
from agenda.services.state import AgendaError, AgendaState, CommandResult

logger = logging.getLogger(__name__)


def is_sentinel(patient: Patient) -> bool:
    """The group-sessions placeholder: empty first name, reserved last name."""
    return patient.first_name == "" and patient.last_name == settings.group_sessions_label


def make_sentinel() -> Patient:
    return Patient(id=new_id(), first_name="", last_name=settings.group_sessions_label)


def display_name(patient: Patient | None) -> str:
    if patient is None:
        return settings.patient_not_found_label
    return f"{patient.last_name} {patient.first_name}".strip()


def sorted_patients(patients) -> list[Patient]:
    return sorted(patients, key=lambda p: (p.last_name.casefold(), p.first_name.casefold()))


def last_visit(state: AgendaState, patient_id: str, today: date) -> date | None:
    """Most recent appointment date on or before today."""
    today_str = format_date(today)
    past = [a.date for a in state.appointments if a.patient_id == patient_id and a.date <= today_str]
    if not past:
        return None
    return date.fromisoformat(max(past))


def add_patient(state: AgendaState, data: PatientCreate) -> tuple[AgendaState, CommandResult]:
    first_name = data.first_name.strip()
    last_name = data.last_name.strip()
    if not last_name:
        return state, CommandResult.failure(AgendaError.MISSING_LAST_NAME, "Il cognome è obbligatorio.")

    key = (first_name.casefold(), last_name.casefold())
    if any((p.first_name.casefold(), p.last_name.casefold()) == key for p in state.patients):
        return state, CommandResult.failure(
            AgendaError.DUPLICATE_PATIENT,
            "Un paziente con lo stesso nome e cognome esiste già.",
        )

    patient = Patient(id=new_id(), first_name=first_name, last_name=last_name)
    logger.info("Patient added: %s (%s)", display_name(patient), patient.id)
    return (
        state.with_patients([*state.patients, patient]),
        CommandResult.success("Paziente aggiunto!", [patient.id]),
    )


def delete_patient(state: AgendaState, patient_id: str) -> tuple[AgendaState, CommandResult]:
    """Remove a patient. Their appointments stay and render as 'not found'."""
    patient = state.find_patient(patient_id)
    if patient is None:
        return state, CommandResult.failure(AgendaError.NOT_FOUND, "Paziente non trovato.")
    if is_sentinel(patient):
        return state, CommandResult.failure(
            AgendaError.PROTECTED_PATIENT,
            f'"{display_name(patient)}" non può essere eliminato.',
        )

    orphaned = sum(1 for a in state.appointments if a.patient_id == patient_id)
    message = "Paziente eliminato."
    if orphaned:
        message += f" {orphaned} appuntamenti associati non sono stati eliminati."
    logger.info("Patient deleted: %s (%s), %d appointment(s) orphaned", display_name(patient), patient_id, orphaned)
    return (
        state.with_patients(p for p in state.patients if p.id != patient_id),
        CommandResult.success(message, [patient_id]),
    )
