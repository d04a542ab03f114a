import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.db import create_all
from app.footprint.router import router as footprint_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.create_tables:
        logger.info("Creating database tables")
        await create_all()
    yield


app = FastAPI(title="Carbon Footprint Tracker", version="0.1.0", lifespan=lifespan)
app.include_router(footprint_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "api": {
            "activities": "/api/activities",
            "calculate": "/api/calculate",
            "factors": "/api/factors",
            "dashboard": "/api/dashboard",
            "leaderboard": "/api/leaderboard",
            "goals": "/api/goals",
            "achievements": "/api/achievements",
            "user": "/api/auth/user",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
