"""
Controlador de leaderboards - Endpoints de clasificación

Las filas las escribe el script de CI al mergear cada PR.
Este controlador solo lee, filtra y ordena.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.core.dependencies import Leaderboard
from app.models.leaderboard import LeaderboardView, RankedEntry, ViewMode
from app.repositories.leaderboard_repository import StorageReadError


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


def _iso(day: Optional[date]) -> Optional[str]:
    return day.isoformat() if day else None


@router.get("", response_model=LeaderboardView)
async def get_leaderboard(
    service: Leaderboard,
    mode: ViewMode = Query(ViewMode.OVERALL, description="overall o daily"),
    day: Optional[date] = Query(None, alias="date", description="Día de referencia (YYYY-MM-DD)")
):
    """
    Obtener el leaderboard ordenado por puntos.

    En modo daily solo aparecen los usuarios que sumaron preguntas ese día.
    Sin fecha, se usa el día de hoy.
    """
    try:
        return await service.get_leaderboard(mode, _iso(day))
    except StorageReadError as e:
        # El frontend muestra el error y puede reintentar
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )


@router.get("/users/{username}", response_model=RankedEntry)
async def get_user_position(
    username: str,
    service: Leaderboard,
    mode: ViewMode = Query(ViewMode.OVERALL),
    day: Optional[date] = Query(None, alias="date")
):
    """
    Obtener la posición de un usuario en el leaderboard.
    """
    try:
        entry = await service.get_user_rank(username, mode, _iso(day))
    except StorageReadError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{username} no aparece en el leaderboard"
        )

    return entry
