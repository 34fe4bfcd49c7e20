from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (sync URL; the async driver is derived in core.db)
    database_url: str = "sqlite:///./agenda.db"

    # Working day used by the free-slot search
    day_start: str = "08:00"
    day_end: str = "18:00"
    break_start: str = "12:00"
    break_end: str = "14:00"
    default_slot_minutes: int = 60

    # Labels
    group_sessions_label: str = "Corsi e riunioni"
    patient_not_found_label: str = "Paziente non trovato"

    # Env
    env: str = "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"


settings = Settings()
