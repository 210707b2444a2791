"""
Estatísticas da carreira: média ponderada, CFU, previsão de laurea e
simulação de votos. Tudo aqui é puro: recebe a lista de exames e não toca
no banco.
"""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from app.models.exam import ExamStatus

DEFAULT_TOTAL_CFU = 180
UNDATED_LABEL = "Data da definire"

MONTHS_IT = [
    "Gennaio", "Febbraio", "Marzo", "Aprile", "Maggio", "Giugno",
    "Luglio", "Agosto", "Settembre", "Ottobre", "Novembre", "Dicembre",
]

def round_half_up(x: float, places: str = "0.01") -> float:
    return float(Decimal(str(x)).quantize(Decimal(places), rounding=ROUND_HALF_UP))

# --- PRÓXIMO EXAME / SCADENZA ---

@dataclass
class UpcomingItem:
    title: str
    date: date
    days_remaining: int
    kind: str # exam | deadline
    urgency: str

def urgency_for(days_remaining: int) -> str:
    if days_remaining <= 7:
        return "urgent"
    if days_remaining <= 15:
        return "warning"
    if days_remaining <= 30:
        return "approaching"
    return "safe"

def _as_day(value) -> date:
    # Datas com hora são truncadas para o dia
    return value.date() if isinstance(value, datetime) else value

def _soonest(candidates, today: date, kind: str) -> Optional[UpcomingItem]:
    future = []
    for title, when in candidates:
        day = _as_day(when)
        if day >= today:
            future.append((day, title))

    if not future:
        return None

    # sort estável: em empate fica o primeiro da lista
    future.sort(key=lambda pair: pair[0])
    day, title = future[0]
    days = (day - today).days
    return UpcomingItem(title=title, date=day, days_remaining=days, kind=kind, urgency=urgency_for(days))

def next_upcoming_exam(exams: Iterable, today: date) -> Optional[UpcomingItem]:
    candidates = [
        (e.name, e.date) for e in exams
        if e.status == ExamStatus.PLANNED and e.date is not None
    ]
    return _soonest(candidates, today, "exam")

def next_upcoming_deadline(deadlines: Iterable, today: date) -> Optional[UpcomingItem]:
    candidates = [
        (d.title, d.due_date) for d in deadlines
        if not d.is_completed and d.due_date is not None
    ]
    return _soonest(candidates, today, "deadline")

# --- SIMULAÇÃO ---

class GradeSimulation:
    """
    Votos hipotéticos por exam_id, separados dos exames reais.
    Só são mesclados no cálculo; desligar a simulação descarta tudo.
    """

    def __init__(self, grades: Optional[Dict[int, int]] = None):
        self.enabled = False
        self.grades: Dict[int, int] = {}
        if grades:
            self.enable()
            for exam_id, grade in grades.items():
                self.set_grade(exam_id, grade)

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False
        self.grades = {}

    def set_grade(self, exam_id, grade: Optional[int]):
        if grade is None:
            self.grades.pop(exam_id, None)
            return
        if not 1 <= grade <= 31:
            raise ValueError(f"Voto fora do intervalo 1-31: {grade}")
        self.grades[exam_id] = grade

    def grade_for(self, exam_id) -> Optional[int]:
        if not self.enabled:
            return None
        return self.grades.get(exam_id)

# --- MÉDIA / CFU / PREVISÃO ---

@dataclass
class AcademicStats:
    average: float
    cfu_progress: int
    total_cfu: int
    projection: float
    simulated: bool = False

def active_exams(exams: Iterable, simulation: Optional[GradeSimulation] = None) -> List[tuple]:
    """Pares (cfu, voto) que entram na conta."""
    active = []
    for e in exams:
        if e.status == ExamStatus.PASSED and e.grade:
            active.append((e.cfu, e.grade))
        elif e.status == ExamStatus.PLANNED and simulation is not None:
            simulated = simulation.grade_for(e.id)
            if simulated:
                active.append((e.cfu, simulated))
    return active

def weighted_average(pairs: List[tuple]) -> float:
    total_cfu = sum(cfu for cfu, _ in pairs)
    if total_cfu <= 0:
        return 0.0
    return sum(cfu * grade for cfu, grade in pairs) / total_cfu

def graduation_projection(average: float) -> float:
    # Escala de 30 para 110, sem teto (simulações podem passar de 110)
    return average * 110 / 30

def compute_stats(exams: Iterable, simulation: Optional[GradeSimulation] = None,
                  total_cfu: int = DEFAULT_TOTAL_CFU) -> AcademicStats:
    pairs = active_exams(exams, simulation)
    average = weighted_average(pairs)
    return AcademicStats(
        average=round_half_up(average, "0.01"),
        cfu_progress=sum(cfu for cfu, _ in pairs),
        total_cfu=total_cfu,
        projection=round_half_up(graduation_projection(average), "0.1"),
        simulated=bool(simulation and simulation.enabled),
    )

# --- AGRUPAMENTOS PARA A TELA ---

def month_label(day: date) -> str:
    return f"{MONTHS_IT[day.month - 1]} {day.year}"

def _dated_first(exam, descending: bool = False):
    if exam.date is None:
        return (1, 0)
    ordinal = exam.date.toordinal()
    return (0, -ordinal if descending else ordinal)

def group_planned_by_month(exams: Iterable) -> Dict[str, list]:
    """Planejados por 'Mese Anno', cada grupo em ordem crescente; sem data no fim."""
    planned = sorted(
        (e for e in exams if e.status == ExamStatus.PLANNED),
        key=_dated_first
    )

    groups: Dict[str, list] = {}
    for exam in planned:
        key = month_label(exam.date) if exam.date else UNDATED_LABEL
        groups.setdefault(key, []).append(exam)
    return groups

def history(exams: Iterable) -> list:
    """Superados e reprovados juntos, mais recentes primeiro; sem data no fim."""
    done = [e for e in exams if e.status in (ExamStatus.PASSED, ExamStatus.FAILED)]
    return sorted(done, key=lambda e: _dated_first(e, descending=True))
