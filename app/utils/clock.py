from datetime import date, datetime
import pytz

from app.core.config import settings

def local_tz():
    return pytz.timezone(settings.TIMEZONE)

def get_local_time() -> datetime:
    """Retorna a data/hora local atual (naive) para comparar com o banco."""
    return datetime.now(local_tz()).replace(tzinfo=None)

def get_local_today() -> date:
    return get_local_time().date()
