from pydantic import BaseModel
from datetime import datetime
from enum import Enum

class ReminderEntity(str, Enum):
    EXAM = "exam"
    DEADLINE = "deadline"

class ReminderCreate(BaseModel):
    entity_type: ReminderEntity
    entity_id: int
    remind_at: datetime

class ReminderResponse(BaseModel):
    id: int
    entity_type: ReminderEntity
    entity_id: int
    remind_at: datetime
    is_sent: bool

    class Config:
        from_attributes = True
