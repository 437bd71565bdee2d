"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from fastapi import APIRouter
from pydantic import BaseModel

from app.database import Database


router = APIRouter(tags=["health"])

PING_TIMEOUT_SECONDS = 2.0


class HealthResponse(BaseModel):
    """Estado de la API y de MongoDB."""
    status: str
    database: str  # connected | disconnected


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    La API responde siempre "ok"; el campo database refleja un ping real
    a MongoDB, así un cluster caído se ve aunque el cliente exista.
    """
    reachable = await Database.ping(PING_TIMEOUT_SECONDS)

    return HealthResponse(
        status="ok",
        database="connected" if reachable else "disconnected"
    )
