"""
ReconcilerService - Adds the questions of a merged PR to the author's totals.

Flow:
1. Count question files in the change-set (none → nothing touches storage)
2. Turn the count into a delta (questions, points)
3. Persist the new totals with a single write, refreshing avatar and date

NOTE: running twice for the same PR counts it twice. The totals are always
incremented, never set, so CI must run this once per merged PR.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from app.core.config import PathMatchMode, UpdateStrategy
from app.models.leaderboard import ContributionDelta, LeaderboardEntry
from app.repositories.leaderboard_repository import LeaderboardRepository
from app.services.avatar_service import AvatarService
from app.services.contribution_service import DEFAULT_ROOT, count_contributions
from app.services.points_service import (
    DEFAULT_POINTS_PER_QUESTION,
    compute_delta,
    merge,
)

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    username: str
    updated: bool
    delta: ContributionDelta
    entry: Optional[LeaderboardEntry] = None


class ReconcilerService:
    def __init__(
        self,
        repository: LeaderboardRepository,
        avatar_service: AvatarService,
        points_per_question: int = DEFAULT_POINTS_PER_QUESTION,
        root: str = DEFAULT_ROOT,
        mode: PathMatchMode = PathMatchMode.SCOPED,
        strategy: UpdateStrategy = UpdateStrategy.ATOMIC
    ):
        self.repository = repository
        self.avatar_service = avatar_service
        self.points_per_question = points_per_question
        self.root = root
        self.mode = mode
        self.strategy = strategy

    async def reconcile(
        self,
        change_set: Iterable[str],
        actor: str,
        today: str
    ) -> ReconcileResult:
        """
        Apply one PR to the leaderboard.

        Raises StorageReadError / StorageWriteError when MongoDB fails; the
        avatar lookup never raises.
        """
        username = actor.strip().lower()
        new_questions = count_contributions(change_set, username, self.root, self.mode)

        if new_questions == 0:
            logger.info("ℹ️ No question files detected for this PR. Nothing to update.")
            return ReconcileResult(
                username=username,
                updated=False,
                delta=ContributionDelta()
            )

        delta = compute_delta(new_questions, self.points_per_question)
        logger.info(
            f"👤 User       : {username}\n"
            f"📝 New Qs     : {delta.questions}\n"
            f"⭐ New points : {delta.points}  ({self.points_per_question} pts each)"
        )

        if self.strategy == UpdateStrategy.ATOMIC:
            entry = await self._apply_atomic(username, delta, today)
        else:
            entry = await self._apply_read_modify_write(username, delta, today)

        logger.info(f"✅ Leaderboard updated for {username}!")
        return ReconcileResult(
            username=username,
            updated=True,
            delta=delta,
            entry=entry
        )

    async def _apply_atomic(
        self,
        username: str,
        delta: ContributionDelta,
        today: str
    ) -> LeaderboardEntry:
        avatar = await self.avatar_service.fetch_avatar(username)
        entry = await self.repository.increment(username, delta, avatar, today)

        logger.info(
            f"📊 Running totals:\n"
            f"    questions : {entry.questions - delta.questions} + {delta.questions} = {entry.questions}\n"
            f"    points    : {entry.points - delta.points} + {delta.points} = {entry.points}"
        )
        return entry

    async def _apply_read_modify_write(
        self,
        username: str,
        delta: ContributionDelta,
        today: str
    ) -> LeaderboardEntry:
        # Two runs for the same user at once can lose one of the updates
        existing = await self.repository.get_by_username(username)
        avatar = await self.avatar_service.fetch_avatar(username)
        merged = merge(existing, delta, today, avatar=avatar, username=username)

        logger.info(
            f"📊 Running totals:\n"
            f"    questions : {merged.questions - delta.questions} + {delta.questions} = {merged.questions}\n"
            f"    points    : {merged.points - delta.points} + {delta.points} = {merged.points}"
        )
        return await self.repository.upsert(merged)
