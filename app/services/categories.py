from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.models.deadline import DeadlineCategory

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["Tassa Universitaria", "Altro / Varie"]

def list_ordered(db: Session) -> List[DeadlineCategory]:
    return db.query(DeadlineCategory).order_by(
        DeadlineCategory.sort_order, DeadlineCategory.created_at, DeadlineCategory.id
    ).all()

def next_sort_order(categories: List[DeadlineCategory]) -> int:
    return max((c.sort_order or 0 for c in categories), default=0) + 1

def move_category(categories: List[DeadlineCategory], category_id: int, direction: str) -> Optional[List[DeadlineCategory]]:
    """
    Troca a categoria com a vizinha (up/down) e grava o índice da lista como
    sort_order, só nas linhas que mudaram. Retorna None se o id não existe;
    nas pontas a lista volta igual.
    """
    index = next((i for i, c in enumerate(categories) if c.id == category_id), None)
    if index is None:
        return None

    if direction == "up" and index == 0:
        return categories
    if direction == "down" and index == len(categories) - 1:
        return categories

    new_index = index - 1 if direction == "up" else index + 1
    reordered = list(categories)
    reordered[index], reordered[new_index] = reordered[new_index], reordered[index]

    for position, category in enumerate(reordered):
        if category.sort_order != position:
            category.sort_order = position
    return reordered

def seed_defaults(db: Session) -> int:
    """Cria as categorias padrão se a tabela estiver vazia."""
    if db.query(DeadlineCategory).count():
        return 0
    for position, name in enumerate(DEFAULT_CATEGORIES):
        db.add(DeadlineCategory(name=name, sort_order=position))
    db.commit()
    logger.info(f"Categorias padrão criadas: {len(DEFAULT_CATEGORIES)}")
    return len(DEFAULT_CATEGORIES)
