import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.api import deps
from app.services.push import PushService, PushConfigurationError
from app.services.reminders import dispatch_due_reminders

logger = logging.getLogger(__name__)

router = APIRouter()

def _error_response(err: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": str(err), "details": {"name": type(err).__name__}}
    )

@router.get("/reminders")
def run_reminders(db: Session = Depends(deps.get_db)):
    """Passada de lembretes chamada pelo agendador externo."""
    try:
        # Config primeiro: sem VAPID nem consulta o banco
        push_service = PushService()
        summary = dispatch_due_reminders(db, push_service)
    except PushConfigurationError as e:
        logger.error(f"❌ Cron sem configuração: {e}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"❌ Cron falhou: {e}")
        db.rollback()
        return _error_response(e)

    if not summary.processed:
        return {"message": "Nenhum lembrete para enviar."}

    return {
        "success": True,
        "sent": summary.sent,
        "processed": summary.processed,
        "failed": summary.failed,
        "pruned": summary.pruned,
    }
