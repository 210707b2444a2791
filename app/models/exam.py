from sqlalchemy import Boolean, Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from app.db.base import Base
import enum

class ExamStatus(str, enum.Enum):
    PLANNED = "planned"
    PASSED = "passed"
    FAILED = "failed"

class Exam(Base):
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, index=True)
    # Código do catálogo de cursos (opcional, ex: 'anatomia')
    course_id = Column(String(50), nullable=True)
    name = Column(String(255), nullable=False)
    cfu = Column(Integer, nullable=False)

    # Só tem valor quando status == passed (31 = 30 e lode)
    grade = Column(Integer, nullable=True)
    date = Column(Date, nullable=True)

    # Status: planned, passed, failed
    status = Column(String(20), default=ExamStatus.PLANNED.value, nullable=False)

    # Sede do exame
    location = Column(String(255), nullable=True)
    is_paid_location = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
