from pydantic import BaseModel, Field, conint
import datetime as dt
from typing import Dict, List, Optional

from app.schemas.exam import ExamResponse
from app.schemas.deadline import DeadlineListEntry

class UpcomingResponse(BaseModel):
    title: str
    date: dt.date
    days_remaining: int
    kind: str
    urgency: str

class StatsResponse(BaseModel):
    average: float
    cfu_progress: int
    total_cfu: int
    projection: float
    simulated: bool

class PlannedGroup(BaseModel):
    label: str
    exams: List[ExamResponse]

class DashboardResponse(BaseModel):
    next_exam: Optional[UpcomingResponse] = None
    next_deadline: Optional[UpcomingResponse] = None
    stats: StatsResponse
    planned_by_month: List[PlannedGroup]
    history: List[ExamResponse]
    deadlines: List[DeadlineListEntry]

class SimulationRequest(BaseModel):
    # exam_id -> voto hipotético
    grades: Dict[int, conint(ge=1, le=31)] = Field(default_factory=dict)
