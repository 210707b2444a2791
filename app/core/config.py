from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # --- GERAIS ---
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "UniTracker"
    LOG_LEVEL: str = "INFO"

    # --- BANCO DE DADOS ---
    # Sem valor padrão: se não estiver no .env o app nem sobe.
    SQLALCHEMY_DATABASE_URI: str

    # --- URLs ---
    FRONTEND_URL: str = "http://localhost:3000"

    # --- PUSH NOTIFICATIONS ---
    # Opcionais na subida; o PushService valida antes de qualquer envio.
    VAPID_PRIVATE_KEY: Optional[str] = None
    VAPID_PUBLIC_KEY: Optional[str] = None
    VAPID_CLAIMS_EMAIL: Optional[str] = None

    # --- AGENDADOR ---
    TIMEZONE: str = "Europe/Rome"
    SCHEDULER_ENABLED: bool = True
    REMINDER_INTERVAL_MINUTES: int = 5

    # --- CARREIRA ---
    TOTAL_CFU_TARGET: int = 180

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
