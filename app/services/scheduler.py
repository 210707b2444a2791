from apscheduler.schedulers.background import BackgroundScheduler
import logging

from app.core.config import settings
from app.db.session import SessionLocal

# Configuração de Logs
logger = logging.getLogger(__name__)

# Inicializa o agendador
scheduler = BackgroundScheduler(timezone=settings.TIMEZONE)

def run_reminder_job():
    """Uma passada de lembretes a partir do agendador (sessão própria)."""

    # Importação tardia para não travar a subida do servidor
    from app.services.push import PushService
    from app.services.reminders import dispatch_due_reminders

    logger.info("⏱️ [Scheduler] Verificando lembretes...")
    db = SessionLocal()

    try:
        push_service = PushService()
        summary = dispatch_due_reminders(db, push_service)
        logger.info(f"[Scheduler] {summary.processed} lembretes, {summary.sent} entregas")
        return summary
    except Exception as e:
        logger.error(f"❌ Erro Scheduler: {e}")
        db.rollback()
    finally:
        db.close()

def start_scheduler():
    if not scheduler.running:
        scheduler.add_job(
            run_reminder_job,
            'interval',
            minutes=settings.REMINDER_INTERVAL_MINUTES,
            id="reminders",
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )
        scheduler.start()
        logger.info(f"--- 🕒 Scheduler Iniciado ({settings.REMINDER_INTERVAL_MINUTES} min) ---")

def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
