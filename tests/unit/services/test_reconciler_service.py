"""
Unit tests for ReconcilerService
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.core.config import PathMatchMode, UpdateStrategy
from app.repositories.leaderboard_repository import (
    LeaderboardRepository,
    StorageReadError,
    StorageWriteError,
)
from app.services.avatar_service import AvatarService
from app.services.reconciler_service import ReconcilerService

TODAY = "2026-02-24"
BOTH_STRATEGIES = pytest.mark.parametrize(
    "strategy", [UpdateStrategy.ATOMIC, UpdateStrategy.READ_MODIFY_WRITE]
)


@pytest.fixture
def avatar_service():
    service = MagicMock(spec=AvatarService)
    service.fetch_avatar = AsyncMock(return_value="https://avatars/alice.png")
    return service


def make_reconciler(repository, avatar_service, **kwargs) -> ReconcilerService:
    return ReconcilerService(repository=repository, avatar_service=avatar_service, **kwargs)


class TestReconcilerService:
    """Test suite for applying a PR to the leaderboard."""

    @pytest.mark.asyncio
    async def test_no_contributions_touches_nothing(self, avatar_service):
        repository = MagicMock(spec=LeaderboardRepository)
        repository.get_by_username = AsyncMock()
        repository.upsert = AsyncMock()
        repository.increment = AsyncMock()
        reconciler = make_reconciler(repository, avatar_service)

        result = await reconciler.reconcile(["README.md", "member/bob/q1.png"], "alice", TODAY)

        assert result.updated is False
        assert result.delta.questions == 0
        assert result.entry is None
        repository.get_by_username.assert_not_awaited()
        repository.upsert.assert_not_awaited()
        repository.increment.assert_not_awaited()
        avatar_service.fetch_avatar.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_change_set(self, avatar_service):
        repository = MagicMock(spec=LeaderboardRepository)
        repository.increment = AsyncMock()
        reconciler = make_reconciler(repository, avatar_service)

        result = await reconciler.reconcile([], "alice", TODAY)

        assert result.updated is False
        repository.increment.assert_not_awaited()

    @BOTH_STRATEGIES
    @pytest.mark.asyncio
    async def test_adds_to_existing_totals(self, test_db, avatar_service, strategy):
        await test_db["leaderboard"].insert_one(
            {"_id": "alice", "username": "alice", "avatar": "old.png", "questions": 5, "points": 50, "date": "2026-02-20"}
        )
        reconciler = make_reconciler(LeaderboardRepository(test_db), avatar_service, strategy=strategy)

        result = await reconciler.reconcile(
            ["member/alice/q1.png", "member/alice/q2.png"], "alice", TODAY
        )

        assert result.updated is True
        assert result.entry.questions == 7
        assert result.entry.points == 70

        doc = await test_db["leaderboard"].find_one({"_id": "alice"})
        assert doc["questions"] == 7
        assert doc["points"] == 70
        assert doc["avatar"] == "https://avatars/alice.png"
        assert doc["date"] == TODAY

    @BOTH_STRATEGIES
    @pytest.mark.asyncio
    async def test_first_contribution_creates_row(self, test_db, avatar_service, strategy):
        reconciler = make_reconciler(LeaderboardRepository(test_db), avatar_service, strategy=strategy)

        await reconciler.reconcile(["member/alice/q1.png"], "Alice", TODAY)

        doc = await test_db["leaderboard"].find_one({"_id": "alice"})
        assert doc["username"] == "alice"
        assert doc["questions"] == 1
        assert doc["points"] == 10

    @BOTH_STRATEGIES
    @pytest.mark.asyncio
    async def test_rerun_counts_twice(self, test_db, avatar_service, strategy):
        """Running the same PR twice doubles the delta (totals are incremented, never set)."""
        reconciler = make_reconciler(LeaderboardRepository(test_db), avatar_service, strategy=strategy)
        change_set = ["member/alice/q1.png", "member/alice/q2.png", "member/alice/q3.png"]

        await reconciler.reconcile(change_set, "alice", TODAY)
        await reconciler.reconcile(change_set, "alice", TODAY)

        doc = await test_db["leaderboard"].find_one({"_id": "alice"})
        assert doc["questions"] == 6
        assert doc["points"] == 60
        assert await test_db["leaderboard"].count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_custom_rate_and_unscoped_mode(self, test_db, avatar_service):
        reconciler = make_reconciler(
            LeaderboardRepository(test_db),
            avatar_service,
            points_per_question=25,
            mode=PathMatchMode.UNSCOPED,
        )

        result = await reconciler.reconcile(
            ["member/alice/q1.png", "member/shared/q2.png", "member/"], "alice", TODAY
        )

        assert result.delta.questions == 2
        assert result.delta.points == 50

    @BOTH_STRATEGIES
    @pytest.mark.asyncio
    async def test_avatar_failure_still_updates(self, test_db, strategy):
        await test_db["leaderboard"].insert_one(
            {"_id": "alice", "username": "alice", "avatar": "old.png", "questions": 1, "points": 10, "date": "2026-02-20"}
        )

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500)

        avatar_service = AvatarService(transport=httpx.MockTransport(handler))
        reconciler = make_reconciler(LeaderboardRepository(test_db), avatar_service, strategy=strategy)

        result = await reconciler.reconcile(["member/alice/q1.png"], "alice", TODAY)

        assert result.updated is True
        doc = await test_db["leaderboard"].find_one({"_id": "alice"})
        assert doc["avatar"] == ""
        assert doc["questions"] == 2

    @pytest.mark.asyncio
    async def test_read_failure_aborts_before_write(self, avatar_service):
        repository = MagicMock(spec=LeaderboardRepository)
        repository.get_by_username = AsyncMock(side_effect=StorageReadError("no servers"))
        repository.upsert = AsyncMock()
        reconciler = make_reconciler(repository, avatar_service, strategy=UpdateStrategy.READ_MODIFY_WRITE)

        with pytest.raises(StorageReadError):
            await reconciler.reconcile(["member/alice/q1.png"], "alice", TODAY)

        repository.upsert.assert_not_awaited()
        avatar_service.fetch_avatar.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_write_failure_propagates(self, avatar_service):
        repository = MagicMock(spec=LeaderboardRepository)
        repository.increment = AsyncMock(side_effect=StorageWriteError("rejected"))
        reconciler = make_reconciler(repository, avatar_service)

        with pytest.raises(StorageWriteError):
            await reconciler.reconcile(["member/alice/q1.png"], "alice", TODAY)
