from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.base import Base

class PushSubscription(Base):
    __tablename__ = "push_subscriptions"

    id = Column(Integer, primary_key=True, index=True)

    # Dados técnicos que o navegador envia (endpoint é a chave natural)
    endpoint = Column(String(500), unique=True, nullable=False)
    auth = Column(String(255), nullable=False)
    p256dh = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
