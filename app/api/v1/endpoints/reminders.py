from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.models.exam import Exam
from app.models.deadline import Deadline
from app.models.reminder import Reminder
from app.schemas.reminder import ReminderCreate, ReminderResponse, ReminderEntity
from app.services.reminders import to_local_naive

router = APIRouter()

ENTITY_MODELS = {
    ReminderEntity.EXAM: Exam,
    ReminderEntity.DEADLINE: Deadline,
}

@router.get("/", response_model=List[ReminderResponse])
def list_reminders(
    entity_type: Optional[ReminderEntity] = None,
    entity_id: Optional[int] = None,
    db: Session = Depends(deps.get_db)
):
    query = db.query(Reminder)
    if entity_type:
        query = query.filter(Reminder.entity_type == entity_type.value)
    if entity_id is not None:
        query = query.filter(Reminder.entity_id == entity_id)
    return query.order_by(Reminder.remind_at).all()

@router.post("/", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
def create_reminder(reminder_in: ReminderCreate, db: Session = Depends(deps.get_db)):
    model = ENTITY_MODELS[reminder_in.entity_type]
    if not db.query(model.id).filter(model.id == reminder_in.entity_id).first():
        raise HTTPException(status_code=404, detail=f"{reminder_in.entity_type.value} não encontrado")

    reminder = Reminder(
        entity_type=reminder_in.entity_type.value,
        entity_id=reminder_in.entity_id,
        remind_at=to_local_naive(reminder_in.remind_at),
        is_sent=False
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder

@router.delete("/{reminder_id}")
def delete_reminder(reminder_id: int, db: Session = Depends(deps.get_db)):
    reminder = db.query(Reminder).filter(Reminder.id == reminder_id).first()
    if not reminder:
        raise HTTPException(status_code=404, detail="Lembrete não encontrado")
    if reminder.is_sent:
        raise HTTPException(status_code=409, detail="Lembrete já enviado.")
    db.delete(reminder)
    db.commit()
    return {"message": "Lembrete removido."}
