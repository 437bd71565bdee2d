from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ViewMode(str, Enum):
    OVERALL = "overall"
    DAILY = "daily"


class ViewState(str, Enum):
    # "loading" vive solo en el cliente mientras espera la respuesta
    EMPTY = "empty"
    LOADED = "loaded"


class LeaderboardEntry(BaseModel):
    """Fila del leaderboard, una por usuario (username es la clave)"""

    username: str
    avatar: str = ""

    questions: int = Field(0, ge=0)
    points: int = Field(0, ge=0)

    date: Optional[str] = None  # YYYY-MM-DD, último día en que cambió

    model_config = ConfigDict(populate_by_name=True, extra="ignore")  # extra: _id de Mongo


class ContributionDelta(BaseModel):
    """Lo que suma un PR: preguntas nuevas y los puntos que valen"""

    questions: int = Field(0, ge=0)
    points: int = Field(0, ge=0)


class RankedEntry(LeaderboardEntry):
    rank: int


class LeaderboardView(BaseModel):
    """Vista ya ordenada, lista para pintar (podio + resto)"""

    mode: ViewMode
    reference_date: str
    state: ViewState

    entries: list[RankedEntry]
    podium: list[RankedEntry]  # orden visual: 2°, 1°, 3°
    others: list[RankedEntry]
