"""
update_leaderboard - Lo llama GitHub Actions cuando se mergea un PR.

Qué hace:
  1. Lee el autor del PR y los archivos cambiados de las variables de entorno
  2. Cuenta las capturas dentro de member/<usuario>/
  3. Suma preguntas y puntos al total del usuario en MongoDB
     (el avatar se refresca desde GitHub en cada ejecución)

Variables de entorno: ver ReconcilerSettings en app/core/config.py

Códigos de salida:
  0 - leaderboard actualizado, o el PR no tenía preguntas
  1 - configuración inválida o fallo de MongoDB

Uso:
    python -m app.scripts.update_leaderboard
"""

import asyncio
import logging

from app.core.config import ConfigurationError, ReconcilerSettings, load_reconciler_settings
from app.database import Database
from app.repositories.leaderboard_repository import (
    LeaderboardRepository,
    LeaderboardRepositoryError,
)
from app.services.avatar_service import AvatarService
from app.services.contribution_service import parse_change_set
from app.services.leaderboard_service import today_in
from app.services.reconciler_service import ReconcilerService

logger = logging.getLogger(__name__)


def build_reconciler(settings: ReconcilerSettings) -> ReconcilerService:
    return ReconcilerService(
        repository=LeaderboardRepository(Database.get_db()),
        avatar_service=AvatarService(
            token=settings.github_token,
            timeout=settings.avatar_timeout_seconds
        ),
        points_per_question=settings.points_per_question,
        root=settings.contribution_root,
        mode=settings.path_match_mode,
        strategy=settings.update_strategy,
    )


async def main() -> int:
    try:
        settings = load_reconciler_settings()
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1

    today = (
        settings.leaderboard_date.isoformat()
        if settings.leaderboard_date
        else today_in("UTC")
    )
    logger.info(
        f"⚙️ Path mode: {settings.path_match_mode.value}, "
        f"strategy: {settings.update_strategy.value}, date: {today}"
    )

    # El cliente no abre conexiones hasta la primera operación
    await Database.connect(
        settings.mongodb_uri,
        settings.mongodb_db_name,
        settings.storage_timeout_seconds
    )
    try:
        reconciler = build_reconciler(settings)
        await reconciler.reconcile(
            parse_change_set(settings.changed_files),
            settings.pr_author,
            today
        )
    except LeaderboardRepositoryError as e:
        logger.error(f"❌ {e}")
        return 1
    except Exception:
        logger.exception("❌ Unexpected error")
        return 1
    finally:
        await Database.disconnect()

    return 0


def run():
    """Entry point del console script."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
