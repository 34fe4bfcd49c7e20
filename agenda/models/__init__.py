from agenda.models.appointment import Appointment, AppointmentCreate, AppointmentType
from agenda.models.patient import Patient, PatientCreate

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentType",
    "Patient",
    "PatientCreate",
]
