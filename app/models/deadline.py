from sqlalchemy import Boolean, Column, Integer, String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base

class Deadline(Base):
    """Scadenza (taxa, parcela, etc.)"""
    __tablename__ = "deadlines"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    due_date = Column(Date, nullable=False)

    # Soma dos itens quando existem; nos registros antigos vem direto aqui
    amount = Column(Numeric(10, 2), nullable=True)
    is_completed = Column(Boolean, default=False)

    # Guarda o NOME da categoria, não uma FK
    category = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    items = relationship(
        "DeadlineItem",
        back_populates="deadline",
        cascade="all, delete-orphan",
        order_by="DeadlineItem.id"
    )

class DeadlineItem(Base):
    """Linha de custo de uma scadenza"""
    __tablename__ = "deadline_items"

    id = Column(Integer, primary_key=True, index=True)
    deadline_id = Column(Integer, ForeignKey("deadlines.id", ondelete="CASCADE"), nullable=False)
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True)

    deadline = relationship("Deadline", back_populates="items")

class DeadlineCategory(Base):
    __tablename__ = "deadline_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
