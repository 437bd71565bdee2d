"""
Servicio de Puntos - Convierte preguntas nuevas en puntos y los suma al total
"""

from typing import Optional

from app.models.leaderboard import ContributionDelta, LeaderboardEntry

DEFAULT_POINTS_PER_QUESTION = 10


def compute_delta(
    new_count: int,
    points_per_unit: int = DEFAULT_POINTS_PER_QUESTION
) -> ContributionDelta:
    """
    Puntos que suma un PR.

    Sistema de puntos:
    - Cada pregunta vale points_per_unit (10 por defecto)

    La tarifa puede cambiar entre ejecuciones, por eso los puntos se
    acumulan y nunca se recalculan desde questions.
    """
    if new_count < 0:
        raise ValueError(f"new_count must be >= 0, got {new_count}")
    if points_per_unit < 0:
        raise ValueError(f"points_per_unit must be >= 0, got {points_per_unit}")

    return ContributionDelta(
        questions=new_count,
        points=new_count * points_per_unit
    )


def merge(
    existing: Optional[LeaderboardEntry],
    delta: ContributionDelta,
    today: str,
    avatar: str = "",
    username: Optional[str] = None
) -> LeaderboardEntry:
    """
    Sumar el delta a los totales guardados.

    Si el usuario no tiene fila se parte de cero. El avatar y la fecha
    siempre se pisan con los valores nuevos (avatar vacío incluido).
    """
    if existing is None and username is None:
        raise ValueError("username is required when there is no existing row")

    base_questions = existing.questions if existing else 0
    base_points = existing.points if existing else 0

    return LeaderboardEntry(
        username=(username or existing.username).lower(),
        avatar=avatar,
        questions=base_questions + delta.questions,
        points=base_points + delta.points,
        date=today,
    )
