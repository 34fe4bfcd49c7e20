import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.models.appointment import Appointment
from agenda.models.patient import Patient
from agenda.services.patient_service import make_sentinel
from agenda.services.state import AgendaState

logger = logging.getLogger(__name__)


async def load_state(session: AsyncSession) -> AgendaState:
    """Read both collections. On first run (no patients) seed the group-sessions patient."""
    appointments = (await session.execute(select(Appointment))).scalars().all()
    patients = (await session.execute(select(Patient))).scalars().all()
    if not patients:
        sentinel = make_sentinel()
        session.add(sentinel)
        await session.flush()
        logger.info('Seeded patient "%s" (%s)', sentinel.last_name, sentinel.id)
        patients = [sentinel]
    return AgendaState(appointments=tuple(appointments), patients=tuple(patients))


async def _replace_rows(session: AsyncSession, model, rows) -> int:
    keep = {row.id for row in rows}
    stored = set((await session.execute(select(model.id))).scalars().all())
    stale = stored - keep
    if stale:
        await session.execute(delete(model).where(model.id.in_(stale)))
    for row in rows:
        await session.merge(row)
    return len(stale)


async def save_state(session: AsyncSession, state: AgendaState) -> None:
    """Persist both collections as given: upsert every record, drop rows no longer present."""
    removed_appointments = await _replace_rows(session, Appointment, state.appointments)
    removed_patients = await _replace_rows(session, Patient, state.patients)
    await session.flush()
    logger.debug(
        "Saved %d appointment(s) (%d removed), %d patient(s) (%d removed)",
        len(state.appointments),
        removed_appointments,
        len(state.patients),
        removed_patients,
    )
