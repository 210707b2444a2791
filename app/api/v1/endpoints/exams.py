from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.courses import find_course
from app.models.exam import Exam
from app.models.reminder import ReminderEntity
from app.schemas.exam import ExamCreate, ExamUpdate, ExamResponse
from app.services.reminders import add_entity_reminders, delete_entity_reminders

router = APIRouter()

def _resolve_name_and_cfu(exam_in: ExamCreate):
    """course_id do catálogo tem prioridade sobre name/cfu digitados."""
    if exam_in.course_id:
        course = find_course(exam_in.course_id)
        if not course:
            raise HTTPException(status_code=404, detail="Curso não encontrado no catálogo.")
        return course["name"], course["cfu"]

    if not exam_in.name or not exam_in.cfu:
        raise HTTPException(status_code=400, detail="Informe course_id ou name + cfu.")
    return exam_in.name, exam_in.cfu

def _get_exam_or_404(db: Session, exam_id: int) -> Exam:
    exam = db.query(Exam).filter(Exam.id == exam_id).first()
    if not exam:
        raise HTTPException(status_code=404, detail="Exame não encontrado")
    return exam

@router.get("/", response_model=List[ExamResponse])
def list_exams(db: Session = Depends(deps.get_db)):
    return db.query(Exam).order_by(Exam.date.desc(), Exam.id.desc()).all()

@router.get("/{exam_id}", response_model=ExamResponse)
def get_exam(exam_id: int, db: Session = Depends(deps.get_db)):
    return _get_exam_or_404(db, exam_id)

@router.post("/", response_model=ExamResponse, status_code=status.HTTP_201_CREATED)
def create_exam(exam_in: ExamCreate, db: Session = Depends(deps.get_db)):
    name, cfu = _resolve_name_and_cfu(exam_in)

    exam = Exam(
        course_id=exam_in.course_id,
        name=name,
        cfu=cfu,
        status=exam_in.status.value,
        grade=exam_in.grade,
        date=exam_in.date,
        location=exam_in.location or None,
        is_paid_location=exam_in.is_paid_location
    )
    db.add(exam)
    db.flush()

    if exam_in.reminders:
        add_entity_reminders(db, ReminderEntity.EXAM, exam.id, exam_in.reminders)

    db.commit()
    db.refresh(exam)
    return exam

@router.put("/{exam_id}", response_model=ExamResponse)
def update_exam(exam_id: int, exam_in: ExamUpdate, db: Session = Depends(deps.get_db)):
    exam = _get_exam_or_404(db, exam_id)
    name, cfu = _resolve_name_and_cfu(exam_in)

    exam.course_id = exam_in.course_id
    exam.name = name
    exam.cfu = cfu
    exam.status = exam_in.status.value
    exam.grade = exam_in.grade
    exam.date = exam_in.date
    exam.location = exam_in.location or None
    exam.is_paid_location = exam_in.is_paid_location

    if exam_in.reminders:
        add_entity_reminders(db, ReminderEntity.EXAM, exam.id, exam_in.reminders)

    db.commit()
    db.refresh(exam)
    return exam

@router.delete("/{exam_id}")
def delete_exam(exam_id: int, db: Session = Depends(deps.get_db)):
    exam = _get_exam_or_404(db, exam_id)

    # Lembretes não têm FK: apaga na mão
    removed = delete_entity_reminders(db, ReminderEntity.EXAM, exam.id)
    db.delete(exam)
    db.commit()
    return {"message": "Exame removido.", "reminders_removed": removed}
