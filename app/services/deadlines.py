from datetime import date
from decimal import Decimal
from typing import Iterable, List

from app.models.deadline import Deadline, DeadlineItem

URGENT_DAYS = 7

def recalculate_total(deadline: Deadline) -> Deadline:
    """
    Com itens, o total é sempre a soma deles (Decimal, sem arredondamento
    acumulado). Sem itens, o valor antigo do pai fica como está.
    """
    if not deadline.items:
        return deadline

    deadline.amount = sum((Decimal(str(item.amount)) for item in deadline.items), Decimal("0"))
    if not deadline.category:
        deadline.category = deadline.items[0].category
    return deadline

def apply_items(deadline: Deadline, items_in: Iterable) -> Deadline:
    """Substitui as linhas de custo e recalcula o total."""
    deadline.items = [
        DeadlineItem(
            description=item.description,
            amount=item.amount,
            category=item.category or deadline.category
        )
        for item in items_in
    ]
    return recalculate_total(deadline)

def days_left(due: date, today: date) -> int:
    return (due - today).days

def deadline_state(deadline: Deadline, today: date) -> str:
    if deadline.is_completed:
        return "paid"
    left = days_left(deadline.due_date, today)
    if left < 0:
        return "late"
    if left <= URGENT_DAYS:
        return "urgent"
    return "pending"

def sort_for_display(deadlines: Iterable[Deadline]) -> List[Deadline]:
    """Pendentes primeiro (data crescente), depois pagas (data decrescente)."""
    pending = sorted((d for d in deadlines if not d.is_completed), key=lambda d: d.due_date)
    done = sorted((d for d in deadlines if d.is_completed), key=lambda d: d.due_date, reverse=True)
    return pending + done
