from sqlalchemy import Boolean, Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func
from app.db.base import Base
import enum

class ReminderEntity(str, enum.Enum):
    EXAM = "exam"
    DEADLINE = "deadline"

class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(Integer, primary_key=True, index=True)

    # Chave polimórfica: aponta para exams OU deadlines, por isso sem FK
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(Integer, nullable=False, index=True)

    # Horário local (naive), igual ao que o agendador usa
    remind_at = Column(DateTime, nullable=False)
    is_sent = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("ix_reminders_pending", "is_sent", "remind_at"),
    )
