import asyncio
import logging
import sys
from pathlib import Path

from agenda.core.config import _ENV_FILE, settings
from agenda.core.db import async_session_maker, init_db
from agenda.services.document_service import import_document
from agenda.services.state import AgendaState
from agenda.services.store_service import load_state

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    if not settings.is_production:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
        )


async def bootstrap(import_path: Path | None = None) -> AgendaState:
    """Create tables, optionally import a JSON backup, and load the agenda."""
    configure_logging()
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    await init_db()
    async with async_session_maker() as session:
        try:
            if import_path is not None:
                state = await import_document(session, import_path)
            else:
                state = await load_state(session)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Agenda bootstrap failed")
            raise
    logger.info(
        "Agenda ready: %d appointment(s), %d patient(s)",
        len(state.appointments),
        len(state.patients),
    )
    return state


if __name__ == "__main__":
    asyncio.run(bootstrap(Path(sys.argv[1]) if len(sys.argv) > 1 else None))
