from pydantic import BaseModel, Field, model_validator
import datetime as dt
from typing import List, Optional
from enum import Enum

class ExamStatus(str, Enum):
    PLANNED = "planned"
    PASSED = "passed"
    FAILED = "failed"

class ExamBase(BaseModel):
    status: ExamStatus = ExamStatus.PASSED
    grade: Optional[int] = Field(default=None, ge=1, le=31)
    date: Optional[dt.date] = None
    location: Optional[str] = None
    is_paid_location: bool = False

    @model_validator(mode="after")
    def drop_grade_unless_passed(self):
        # Voto só faz sentido para exame superado
        if self.status != ExamStatus.PASSED:
            self.grade = None
        return self

class ExamCreate(ExamBase):
    # Ou vem o course_id do catálogo, ou name + cfu na mão
    course_id: Optional[str] = None
    name: Optional[str] = None
    cfu: Optional[int] = Field(default=None, gt=0)
    reminders: List[dt.datetime] = []

class ExamUpdate(ExamCreate):
    pass

class ExamResponse(BaseModel):
    id: int
    course_id: Optional[str] = None
    name: str
    cfu: int
    grade: Optional[int] = None
    date: Optional[dt.date] = None
    status: ExamStatus
    location: Optional[str] = None
    is_paid_location: bool = False

    class Config:
        from_attributes = True
