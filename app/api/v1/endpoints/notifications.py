import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError
from app.api import deps
from app.core.config import settings
from app.models.subscription import PushSubscription
from app.schemas.subscription import PushSubscriptionCreate
from app.services.push import PushService, PushConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/vapid-public-key")
def get_vapid_public_key():
    if not settings.VAPID_PUBLIC_KEY:
        raise HTTPException(500, "VAPID não configurado.")
    return {"publicKey": settings.VAPID_PUBLIC_KEY}

@router.post("/subscribe")
def subscribe(payload: Any = Body(None), db: Session = Depends(deps.get_db)):
    # Validado aqui para qualquer corpo inválido responder 400 {error}, não 422
    try:
        sub_in = PushSubscriptionCreate.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Inscrição inválida: {e.error_count()} erro(s)")
        return JSONResponse(status_code=400, content={"error": "Invalid subscription"})
    if not sub_in.endpoint or not sub_in.keys.auth or not sub_in.keys.p256dh:
        return JSONResponse(status_code=400, content={"error": "Invalid subscription"})

    try:
        # Upsert pelo endpoint (chave natural)
        sub = db.query(PushSubscription).filter(
            PushSubscription.endpoint == sub_in.endpoint
        ).first()

        if sub:
            sub.auth = sub_in.keys.auth
            sub.p256dh = sub_in.keys.p256dh
        else:
            db.add(PushSubscription(
                endpoint=sub_in.endpoint,
                auth=sub_in.keys.auth,
                p256dh=sub_in.keys.p256dh
            ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao salvar inscrição: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return {"success": True}

@router.delete("/unsubscribe")
def unsubscribe(endpoint: str, db: Session = Depends(deps.get_db)):
    sub = db.query(PushSubscription).filter(PushSubscription.endpoint == endpoint).first()
    if sub:
        db.delete(sub)
        db.commit()
    return {"success": True}

@router.post("/test")
def send_test_notification(db: Session = Depends(deps.get_db)):
    """Envia um push de teste para todos os dispositivos"""
    try:
        push_service = PushService()
    except PushConfigurationError as e:
        raise HTTPException(500, str(e))

    if not db.query(PushSubscription).count():
        raise HTTPException(400, "Nenhum dispositivo inscrito.")

    count = push_service.broadcast(db, {
        "title": "🔔 Notifiche attive",
        "body": "Se leggi questo messaggio, i promemoria funzionano!",
        "url": "/"
    })
    return {"message": f"Enviado para {count} dispositivos."}
