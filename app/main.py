from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.core.config import settings
from app.api.v1.router import api_router
from app.services.scheduler import start_scheduler, stop_scheduler, run_reminder_job

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SCHEDULER_ENABLED:
        # Inicia o agendador em background
        start_scheduler()

        logger.info("--- 🚀 Executando verificação inicial de lembretes (Boot) ---")
        # Roda uma passada imediata para não esperar o primeiro intervalo
        run_reminder_job()

    yield

    # Para o agendador ao desligar
    stop_scheduler()

app = FastAPI(
    title=settings.PROJECT_NAME,
    lifespan=lifespan
)

origins = [
    "http://localhost:3000",
    settings.FRONTEND_URL,
]
origins = list(set(origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
def root():
    return {"message": "API do UniTracker está rodando!"}
