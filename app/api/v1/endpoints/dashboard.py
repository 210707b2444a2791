from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from app.api import deps
from app.core.config import settings
from app.models.exam import Exam
from app.models.deadline import Deadline
from app.schemas.dashboard import DashboardResponse, SimulationRequest
from app.services import stats
from app.services.deadlines import sort_for_display, days_left, deadline_state
from app.utils.clock import get_local_today

router = APIRouter()

def build_dashboard(db: Session, simulation: stats.GradeSimulation = None) -> dict:
    """Monta a tela principal: contagens, estatísticas e listas."""
    today = get_local_today()
    exams = db.query(Exam).all()
    deadlines = db.query(Deadline).options(selectinload(Deadline.items)).all()

    planned = stats.group_planned_by_month(exams)

    return {
        "next_exam": stats.next_upcoming_exam(exams, today),
        "next_deadline": stats.next_upcoming_deadline(deadlines, today),
        "stats": stats.compute_stats(exams, simulation, total_cfu=settings.TOTAL_CFU_TARGET),
        "planned_by_month": [{"label": label, "exams": group} for label, group in planned.items()],
        "history": stats.history(exams),
        "deadlines": [
            {
                "id": d.id,
                "title": d.title,
                "due_date": d.due_date,
                "amount": d.amount,
                "is_completed": d.is_completed,
                "category": d.category,
                "items": d.items,
                "days_left": days_left(d.due_date, today),
                "state": deadline_state(d, today),
            }
            for d in sort_for_display(deadlines)
        ],
    }

@router.get("/", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(deps.get_db)):
    return build_dashboard(db)

@router.post("/simulate", response_model=DashboardResponse)
def simulate(sim_in: SimulationRequest, db: Session = Depends(deps.get_db)):
    """Mesma tela com votos hipotéticos. Nada é gravado."""
    simulation = stats.GradeSimulation(sim_in.grades)
    simulation.enable()
    return build_dashboard(db, simulation)
