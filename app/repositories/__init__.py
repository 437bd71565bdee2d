from .leaderboard_repository import (
    LeaderboardRepository,
    LeaderboardRepositoryError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "LeaderboardRepository",
    "LeaderboardRepositoryError",
    "StorageReadError",
    "StorageWriteError",
]
