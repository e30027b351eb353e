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

    # Database (in-memory; nothing survives a restart)
    database_url: str = "sqlite+aiosqlite://"
    seed_demo_data: bool = True

    # JWT
    secret_key: str
    access_token_expire_minutes: int = 60
    algorithm: str = "HS256"

    # CORS
    cors_origins: str = "http://localhost:5173"

    # Booking rules
    booking_horizon_days: int = 30
    time_slot_labels: list[str] = [
        "7:00 AM - 8:30 AM",
        "9:00 AM - 10:30 AM",
        "10:30 AM - 12:00 PM",
        "12:00 PM - 1:30 PM",
        "2:00 PM - 3:30 PM",
        "3:30 PM - 5:00 PM",
    ]
    weekday_slot_count: int = 5
    saturday_slot_count: int = 3
    break_slot_label: str = "1:30 PM - 2:00 PM"
    # Shared inbox that receives reception-facing notifications
    reception_inbox_id: str = "reception@clinic.com"

    # Env
    env: str = "development"

    # Email (SMTP). Leave smtp_host empty to disable sending.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    from_email: str = ""
    from_name: str = "Physio Clinic"
    site_name: str = "Physio Clinic"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def email_enabled(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password and self.from_email)


settings = Settings()
