"""JSON backups of the agenda, with upgrades from older document layouts.

Version 1 stored each patient under a single combined ``name``; version 2
splits it into ``firstName``/``lastName`` and records ``schemaVersion``.
Both the browser storage keys (``ossHeroAppointments``, ``ossHeroPatients``)
and plain ``appointments``/``patients`` keys are accepted.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.config import settings
from agenda.models.appointment import Appointment, AppointmentType
from agenda.models.patient import Patient
from agenda.services.calendar_service import duration_hours, format_date, minutes_to_time, time_to_minutes
from agenda.services.state import AgendaState
from agenda.services.store_service import load_state, save_state

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

_APPOINTMENT_KEYS = ("appointments", "ossHeroAppointments")
_PATIENT_KEYS = ("patients", "ossHeroPatients")


def _collection(document: dict[str, Any], keys: tuple[str, ...]) -> list[dict[str, Any]]:
    for key in keys:
        if key in document:
            value = document[key]
            # Browser storage keeps each collection as a JSON string
            if isinstance(value, str):
                value = json.loads(value)
            if not isinstance(value, list):
                raise ValueError(f"{key!r} must be a list, got {type(value).__name__}")
            return value
    return []


def detect_schema_version(document: dict[str, Any]) -> int:
    if "schemaVersion" in document:
        return int(document["schemaVersion"])
    patients = _collection(document, _PATIENT_KEYS)
    if patients and "name" in patients[0]:
        return 1
    return SCHEMA_VERSION


def _require(record: dict[str, Any], key: str, kind: str) -> Any:
    value = record.get(key)
    if value is None:
        raise ValueError(f"{kind} record {record.get('id')!r} has no {key!r}")
    return value


def _split_legacy_name(record: dict[str, Any]) -> dict[str, Any]:
    record_id = _require(record, "id", "Patient")
    name = (record.get("name") or "").strip()
    if name == settings.group_sessions_label:
        return {"id": record_id, "firstName": "", "lastName": name}
    parts = name.split()
    if len(parts) < 2:
        # Last name is mandatory, so a single word goes there
        return {"id": record_id, "firstName": "", "lastName": name}
    return {"id": record_id, "firstName": parts[0], "lastName": " ".join(parts[1:])}


def upgrade_document(document: dict[str, Any]) -> dict[str, Any]:
    """Return the document in the current layout; the input is left untouched."""
    version = detect_schema_version(document)
    if version > SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version {version} (newest known is {SCHEMA_VERSION})")

    appointments = _collection(document, _APPOINTMENT_KEYS)
    patients = _collection(document, _PATIENT_KEYS)
    if version == 1:
        patients = [_split_legacy_name(p) for p in patients]
        logger.info("Upgraded %d patient record(s) from schema 1 to %d", len(patients), SCHEMA_VERSION)
    return {"schemaVersion": SCHEMA_VERSION, "appointments": appointments, "patients": patients}


def appointment_from_record(record: dict[str, Any]) -> Appointment:
    record_id = _require(record, "id", "Appointment")
    raw_date = _require(record, "date", "Appointment")
    try:
        # Stored as-is, dates must compare correctly as strings
        day = format_date(date.fromisoformat(raw_date))
        start = minutes_to_time(time_to_minutes(_require(record, "startTime", "Appointment")))
        end = minutes_to_time(time_to_minutes(_require(record, "endTime", "Appointment")))
    except (TypeError, AttributeError) as exc:
        raise ValueError(f"Appointment {record_id!r}: malformed date or time") from exc
    except ValueError as exc:
        raise ValueError(f"Appointment {record_id!r}: {exc}") from exc
    if time_to_minutes(end) <= time_to_minutes(start):
        raise ValueError(f"Appointment {record_id!r}: end time {end} is not after start time {start}")
    return Appointment.model_validate(
        {
            "id": str(record_id),
            "date": day,
            "start_time": start,
            "end_time": end,
            "type": record["type"],
            "patient_id": str(record.get("patientId", "")),
            "notes": record.get("notes") or None,
            # Stored durations are not trusted; they always follow the times
            "duration": duration_hours(start, end),
        }
    )


def patient_from_record(record: dict[str, Any]) -> Patient:
    return Patient.model_validate(
        {
            "id": str(_require(record, "id", "Patient")),
            "first_name": (record.get("firstName") or "").strip(),
            "last_name": (record.get("lastName") or "").strip(),
        }
    )


def appointment_to_record(appointment: Appointment) -> dict[str, Any]:
    record = {
        "id": appointment.id,
        "date": appointment.date,
        "startTime": appointment.start_time,
        "endTime": appointment.end_time,
        "patientId": appointment.patient_id,
        "type": AppointmentType(appointment.type).value,
        "duration": appointment.duration,
    }
    if appointment.notes:
        record["notes"] = appointment.notes
    return record


def patient_to_record(patient: Patient) -> dict[str, Any]:
    return {"id": patient.id, "firstName": patient.first_name, "lastName": patient.last_name}


def load_document(document: dict[str, Any]) -> AgendaState:
    current = upgrade_document(document)
    return AgendaState(
        appointments=tuple(appointment_from_record(r) for r in current["appointments"]),
        patients=tuple(patient_from_record(r) for r in current["patients"]),
    )


def dump_document(state: AgendaState) -> dict[str, Any]:
    return {
        "schemaVersion": SCHEMA_VERSION,
        "appointments": [appointment_to_record(a) for a in state.appointments],
        "patients": [patient_to_record(p) for p in state.patients],
    }


async def import_document(session: AsyncSession, path: Path) -> AgendaState:
    """Replace the stored agenda with a JSON backup and return the resulting state."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    state = load_document(document)
    await save_state(session, state)
    logger.info(
        "Imported %d appointment(s) and %d patient(s) from %s",
        len(state.appointments),
        len(state.patients),
        path,
    )
    return await load_state(session)


async def export_document(session: AsyncSession, path: Path) -> None:
    state = await load_state(session)
    Path(path).write_text(json.dumps(dump_document(state), ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Exported agenda to %s", path)
