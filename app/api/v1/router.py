from fastapi import APIRouter
from app.api.v1.endpoints import categories, courses, cron, dashboard, deadlines, exams, notifications, reminders

api_router = APIRouter()

api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(exams.router, prefix="/exams", tags=["exams"])
api_router.include_router(courses.router, prefix="/courses", tags=["courses"])
api_router.include_router(deadlines.router, prefix="/deadlines", tags=["deadlines"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(cron.router, prefix="/cron", tags=["cron"])
