"""
Dependencies de FastAPI para inyección de BD y servicios
"""

from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.config import Settings, get_settings
from app.database import get_database
from app.repositories.leaderboard_repository import LeaderboardRepository
from app.services.leaderboard_service import LeaderboardService


def get_leaderboard_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> LeaderboardService:
    """Arma el servicio del leaderboard con la zona horaria configurada"""
    return LeaderboardService(
        LeaderboardRepository(db),
        timezone_name=settings.leaderboard_timezone
    )


# Alias de tipo para que se vea más limpio en los endpoints
Leaderboard = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
