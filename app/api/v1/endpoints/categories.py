from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api import deps
from app.models.deadline import DeadlineCategory
from app.schemas.category import CategoryCreate, CategoryResponse
from app.services.categories import list_ordered, next_sort_order, move_category

router = APIRouter()

@router.get("/", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(deps.get_db)):
    return list_ordered(db)

@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(category_in: CategoryCreate, db: Session = Depends(deps.get_db)):
    category = DeadlineCategory(
        name=category_in.name,
        sort_order=next_sort_order(list_ordered(db))
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category

@router.post("/{category_id}/move", response_model=List[CategoryResponse])
def move(
    category_id: int,
    direction: str = Query(..., pattern="^(up|down)$"),
    db: Session = Depends(deps.get_db)
):
    reordered = move_category(list_ordered(db), category_id, direction)
    if reordered is None:
        raise HTTPException(status_code=404, detail="Categoria não encontrada")
    db.commit()
    return reordered

@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(deps.get_db)):
    # Scadenze guardam o nome, então nada em cascata aqui
    category = db.query(DeadlineCategory).filter(DeadlineCategory.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Categoria não encontrada")
    db.delete(category)
    db.commit()
    return {"message": "Categoria removida."}
