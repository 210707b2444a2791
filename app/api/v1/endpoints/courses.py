from fastapi import APIRouter
from app.core.courses import ALL_COURSES, courses_by_year

router = APIRouter()

@router.get("/")
def list_courses():
    return {"courses": ALL_COURSES, "by_year": courses_by_year()}
