from .leaderboard import (
    ContributionDelta,
    LeaderboardEntry,
    LeaderboardView,
    RankedEntry,
    ViewMode,
    ViewState,
)

__all__ = [
    "ContributionDelta",
    "LeaderboardEntry",
    "LeaderboardView",
    "RankedEntry",
    "ViewMode",
    "ViewState",
]
