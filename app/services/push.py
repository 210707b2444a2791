import json
import logging
import enum
from sqlalchemy.orm import Session
from pywebpush import webpush, WebPushException
from app.core.config import settings
from app.models.subscription import PushSubscription

logger = logging.getLogger(__name__)

# Status que o gateway usa para inscrição expirada/removida
GONE_STATUS_CODES = (404, 410)

class PushConfigurationError(RuntimeError):
    """Chaves VAPID ausentes: nenhum envio é possível."""

class DeliveryResult(str, enum.Enum):
    DELIVERED = "delivered"
    GONE = "gone"
    FAILED = "failed"

class PushService:

    def __init__(self, config=settings):
        missing = [
            name for name in ("VAPID_PRIVATE_KEY", "VAPID_PUBLIC_KEY", "VAPID_CLAIMS_EMAIL")
            if not getattr(config, name, None)
        ]
        if missing:
            raise PushConfigurationError(f"Chaves VAPID ausentes: {', '.join(missing)}")

        self.private_key = config.VAPID_PRIVATE_KEY
        claims_sub = config.VAPID_CLAIMS_EMAIL
        if not claims_sub.startswith(("mailto:", "https://")):
            claims_sub = f"mailto:{claims_sub}"
        self.claims_sub = claims_sub

    def send(self, subscription: PushSubscription, data: dict) -> DeliveryResult:
        """
        Envia um push para uma inscrição (modelo ou PushTarget: basta ter
        endpoint, auth e p256dh). Nunca levanta exceção.
        """
        try:
            webpush(
                subscription_info={
                    "endpoint": subscription.endpoint,
                    "keys": {
                        "p256dh": subscription.p256dh,
                        "auth": subscription.auth
                    }
                },
                data=json.dumps(data),
                vapid_private_key=self.private_key,
                vapid_claims={"sub": self.claims_sub}
            )
        except WebPushException as ex:
            status_code = ex.response.status_code if ex.response is not None else None
            if status_code in GONE_STATUS_CODES:
                logger.warning(f"🗑️ Inscrição expirada ({status_code}): {subscription.endpoint}")
                return DeliveryResult.GONE
            logger.error(f"❌ Erro Push ({status_code}): {ex}")
            return DeliveryResult.FAILED
        except Exception as ex:
            logger.error(f"❌ Erro Push inesperado em {subscription.endpoint}: {ex}")
            return DeliveryResult.FAILED

        return DeliveryResult.DELIVERED

    def broadcast(self, db: Session, data: dict) -> int:
        """Notifica TODOS os dispositivos inscritos. Retorna quantos receberam."""
        subs = db.query(PushSubscription).all()
        logger.info(f"📢 Iniciando Broadcast Push para {len(subs)} dispositivos...")
        return sum(1 for sub in subs if self.send(sub, data) == DeliveryResult.DELIVERED)
