import pytest
import pytest_asyncio

from agenda.core.db import init_db, make_engine, make_session_maker
from agenda.models import Appointment, AppointmentType, Patient
from agenda.services.calendar_service import duration_hours


@pytest.fixture
def make_appointment():
    counter = iter(range(1, 10_000))

    def _make(date, start="09:00", end="10:00", type=AppointmentType.OSS, patient_id="p1", notes=None, id=None):
        return Appointment(
            id=id or f"a{next(counter)}",
            date=date,
            start_time=start,
            end_time=end,
            type=type,
            patient_id=patient_id,
            notes=notes,
            duration=duration_hours(start, end),
        )

    return _make


@pytest.fixture
def patients():
    return [
        Patient(id="p1", first_name="Mario", last_name="Rossi"),
        Patient(id="p2", first_name="Anna", last_name="Bianchi"),
        Patient(id="g", first_name="", last_name="Corsi e riunioni"),
    ]


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'agenda.db'}")
    await init_db(engine)
    yield make_session_maker(engine)
    await engine.dispose()
