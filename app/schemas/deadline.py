from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

class DeadlineItemIn(BaseModel):
    description: str
    amount: Decimal = Field(ge=0)
    category: Optional[str] = None

class DeadlineItemResponse(DeadlineItemIn):
    id: int
    deadline_id: int

    class Config:
        from_attributes = True

class DeadlineCreate(BaseModel):
    title: str
    due_date: date
    # Ignorado quando existem itens (o total vira a soma deles)
    amount: Optional[Decimal] = Field(default=None, ge=0)
    category: Optional[str] = None
    items: List[DeadlineItemIn] = []
    reminders: List[datetime] = []

class DeadlineUpdate(DeadlineCreate):
    is_completed: Optional[bool] = None

class DeadlineResponse(BaseModel):
    id: int
    title: str
    due_date: date
    amount: Optional[Decimal] = None
    is_completed: bool
    category: Optional[str] = None
    items: List[DeadlineItemResponse] = []

    class Config:
        from_attributes = True

class DeadlineListEntry(DeadlineResponse):
    days_left: int
    state: str # paid | late | urgent | pending
