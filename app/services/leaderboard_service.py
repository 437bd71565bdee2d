"""
LeaderboardService - Builds the ranked views the frontend renders.

Two views:
- overall: every user
- daily: only users whose totals changed on the reference date

Ranking is by points (descending). Python's sort is stable, so ties keep
the order MongoDB returned the documents in.
"""

from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from app.models.leaderboard import (
    LeaderboardEntry,
    LeaderboardView,
    RankedEntry,
    ViewMode,
    ViewState,
)
from app.repositories.leaderboard_repository import LeaderboardRepository

PODIUM_SIZE = 3
# Visual order of the podium: 2nd left, 1st center, 3rd right
PODIUM_ORDER = (2, 1, 3)


def today_in(timezone_name: str = "UTC") -> str:
    """Today's date (YYYY-MM-DD) in the given timezone."""
    return datetime.now(ZoneInfo(timezone_name)).date().isoformat()


def rank_entries(
    entries: Iterable[LeaderboardEntry],
    mode: ViewMode = ViewMode.OVERALL,
    reference_date: Optional[str] = None
) -> list[RankedEntry]:
    """Filter by view mode, sort by points and number the positions."""
    if mode == ViewMode.DAILY:
        entries = [e for e in entries if e.date == reference_date]

    ordered = sorted(entries, key=lambda e: e.points, reverse=True)

    return [
        RankedEntry(rank=idx, **entry.model_dump())
        for idx, entry in enumerate(ordered, start=1)
    ]


def split_podium(ranked: list[RankedEntry]) -> tuple[list[RankedEntry], list[RankedEntry]]:
    """Returns (podium in display order, ranks 4+)."""
    top = {e.rank: e for e in ranked[:PODIUM_SIZE]}
    podium = [top[rank] for rank in PODIUM_ORDER if rank in top]
    return podium, ranked[PODIUM_SIZE:]


class LeaderboardService:
    def __init__(self, repository: LeaderboardRepository, timezone_name: str = "UTC"):
        self.repository = repository
        self.timezone_name = timezone_name

    async def get_leaderboard(
        self,
        mode: ViewMode = ViewMode.OVERALL,
        reference_date: Optional[str] = None
    ) -> LeaderboardView:
        """
        Get the ranked view for a mode.

        reference_date only matters in daily mode; it defaults to today in
        the configured timezone.
        """
        reference_date = reference_date or today_in(self.timezone_name)

        entries = await self.repository.list_all()
        ranked = rank_entries(entries, mode, reference_date)
        podium, others = split_podium(ranked)

        return LeaderboardView(
            mode=mode,
            reference_date=reference_date,
            state=ViewState.LOADED if ranked else ViewState.EMPTY,
            entries=ranked,
            podium=podium,
            others=others,
        )

    async def get_user_rank(
        self,
        username: str,
        mode: ViewMode = ViewMode.OVERALL,
        reference_date: Optional[str] = None
    ) -> Optional[RankedEntry]:
        """Position of one user in a view, None if they aren't in it."""
        view = await self.get_leaderboard(mode, reference_date)
        username = username.lower()

        for entry in view.entries:
            if entry.username.lower() == username:
                return entry

        return None
