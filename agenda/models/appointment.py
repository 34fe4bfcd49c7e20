import datetime as dt
from enum import Enum

from sqlmodel import Field, SQLModel


class AppointmentType(str, Enum):
    ASA = "ASA"
    OSS = "OSS"
    CONSULENZA = "CONSULENZA"
    EXTRA = "EXTRA"


class AppointmentBase(SQLModel):
    date: str = Field(index=True)  # YYYY-MM-DD, local calendar date
    start_time: str  # HH:MM
    end_time: str  # HH:MM, strictly after start_time
    type: AppointmentType
    # No foreign key: deleting a patient leaves its appointments in place
    patient_id: str = Field(index=True)
    notes: str | None = None
    duration: float  # hours, always end_time - start_time


class Appointment(AppointmentBase, table=True):
    __tablename__ = "appointments"
    id: str = Field(primary_key=True)


class AppointmentCreate(SQLModel):
    """Form input for creating or editing an appointment."""

    date: dt.date
    start_time: dt.time
    end_time: dt.time
    type: AppointmentType
    patient_id: str
    notes: str | None = None
