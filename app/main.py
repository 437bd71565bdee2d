"""
Entry point de la API del leaderboard
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.database import Database

from app.controllers.leaderboard_controller import router as leaderboard_router
from app.controllers.health_controller import router as health_router

settings = get_settings()

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect(
        settings.mongodb_uri,
        settings.mongodb_db_name,
        settings.storage_timeout_seconds
    )
    yield
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="Leaderboard API",
    description="Ranking de contribuidores por preguntas y puntos",
    version="1.0.0",
    lifespan=lifespan
)

# El frontend solo lee, así que alcanza con GET
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(leaderboard_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "Leaderboard API",
        "version": "1.0.0",
        "docs": "/docs"
    }
