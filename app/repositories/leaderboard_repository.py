"""
LeaderboardRepository - MongoDB access for the leaderboard collection.

One document per user, keyed by the lower-cased username (also the _id).
Every driver failure is wrapped so callers can tell reads from writes.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.database import LEADERBOARD_COLLECTION
from app.models.leaderboard import ContributionDelta, LeaderboardEntry


class LeaderboardRepositoryError(Exception):
    """Base exception for leaderboard storage errors."""
    pass


class StorageReadError(LeaderboardRepositoryError):
    """Raised when the leaderboard collection can't be read."""
    pass


class StorageWriteError(LeaderboardRepositoryError):
    """Raised when the leaderboard collection rejects a write."""
    pass


class LeaderboardRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[LEADERBOARD_COLLECTION]

    async def get_by_username(self, username: str) -> Optional[LeaderboardEntry]:
        """Point read. Returns None when the user has no row yet."""
        try:
            doc = await self.collection.find_one({"_id": username.lower()})
        except PyMongoError as e:
            raise StorageReadError(f"Failed to fetch row for {username}: {e}") from e
        return LeaderboardEntry(**doc) if doc else None

    async def list_all(self) -> list[LeaderboardEntry]:
        """Full unordered scan (natural order)."""
        try:
            docs = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            raise StorageReadError(f"Failed to fetch leaderboard: {e}") from e
        return [LeaderboardEntry(**doc) for doc in docs]

    async def upsert(self, entry: LeaderboardEntry) -> LeaderboardEntry:
        """Insert or replace the totals of a single user in one write."""
        username = entry.username.lower()
        doc = entry.model_dump()
        doc["username"] = username

        try:
            await self.collection.update_one(
                {"_id": username},
                {"$set": doc},
                upsert=True
            )
        except PyMongoError as e:
            raise StorageWriteError(f"Upsert failed for {username}: {e}") from e

        return LeaderboardEntry(**doc)

    async def increment(
        self,
        username: str,
        delta: ContributionDelta,
        avatar: str,
        today: str
    ) -> LeaderboardEntry:
        """
        Add the delta to the stored totals server-side ($inc).

        Creates the row when missing. Avatar and date are overwritten.
        Returns the document as it is after the update.
        """
        username = username.lower()

        try:
            doc = await self.collection.find_one_and_update(
                {"_id": username},
                {
                    "$inc": {
                        "questions": delta.questions,
                        "points": delta.points,
                    },
                    "$set": {
                        "username": username,
                        "avatar": avatar,
                        "date": today,
                    },
                },
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise StorageWriteError(f"Increment failed for {username}: {e}") from e

        return LeaderboardEntry(**doc)
