from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from app.api import deps
from app.models.deadline import Deadline
from app.models.reminder import ReminderEntity
from app.schemas.deadline import DeadlineCreate, DeadlineUpdate, DeadlineResponse
from app.services.deadlines import apply_items
from app.services.reminders import add_entity_reminders, delete_entity_reminders

router = APIRouter()

def _get_deadline_or_404(db: Session, deadline_id: int) -> Deadline:
    deadline = db.query(Deadline).options(selectinload(Deadline.items)).filter(
        Deadline.id == deadline_id
    ).first()
    if not deadline:
        raise HTTPException(status_code=404, detail="Scadenza não encontrada")
    return deadline

@router.get("/", response_model=List[DeadlineResponse])
def list_deadlines(db: Session = Depends(deps.get_db)):
    return db.query(Deadline).options(selectinload(Deadline.items)).order_by(
        Deadline.due_date, Deadline.id
    ).all()

@router.get("/{deadline_id}", response_model=DeadlineResponse)
def get_deadline(deadline_id: int, db: Session = Depends(deps.get_db)):
    return _get_deadline_or_404(db, deadline_id)

@router.post("/", response_model=DeadlineResponse, status_code=status.HTTP_201_CREATED)
def create_deadline(deadline_in: DeadlineCreate, db: Session = Depends(deps.get_db)):
    deadline = Deadline(
        title=deadline_in.title,
        due_date=deadline_in.due_date,
        amount=deadline_in.amount,
        category=deadline_in.category,
        is_completed=False
    )
    if deadline_in.items:
        apply_items(deadline, deadline_in.items)

    db.add(deadline)
    db.flush()

    if deadline_in.reminders:
        add_entity_reminders(db, ReminderEntity.DEADLINE, deadline.id, deadline_in.reminders)

    db.commit()
    db.refresh(deadline)
    return deadline

@router.put("/{deadline_id}", response_model=DeadlineResponse)
def update_deadline(deadline_id: int, deadline_in: DeadlineUpdate, db: Session = Depends(deps.get_db)):
    deadline = _get_deadline_or_404(db, deadline_id)

    deadline.title = deadline_in.title
    deadline.due_date = deadline_in.due_date
    deadline.category = deadline_in.category
    if deadline_in.is_completed is not None:
        deadline.is_completed = deadline_in.is_completed

    if deadline_in.items:
        apply_items(deadline, deadline_in.items)
    else:
        # Formato antigo: sem itens, valor direto no pai
        deadline.items = []
        deadline.amount = deadline_in.amount

    if deadline_in.reminders:
        add_entity_reminders(db, ReminderEntity.DEADLINE, deadline.id, deadline_in.reminders)

    db.commit()
    db.refresh(deadline)
    return deadline

@router.patch("/{deadline_id}/toggle", response_model=DeadlineResponse)
def toggle_deadline(deadline_id: int, db: Session = Depends(deps.get_db)):
    deadline = _get_deadline_or_404(db, deadline_id)
    deadline.is_completed = not deadline.is_completed
    db.commit()
    db.refresh(deadline)
    return deadline

@router.delete("/{deadline_id}")
def delete_deadline(deadline_id: int, db: Session = Depends(deps.get_db)):
    deadline = _get_deadline_or_404(db, deadline_id)

    removed = delete_entity_reminders(db, ReminderEntity.DEADLINE, deadline.id)
    db.delete(deadline)
    db.commit()
    return {"message": "Scadenza removida.", "reminders_removed": removed}
