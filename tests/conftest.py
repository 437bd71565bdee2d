"""
Pytest fixtures and configuration for all tests.
"""

import os

# app.main reads Settings at import time
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")

import pytest
from typing import AsyncGenerator
from mongomock_motor import AsyncMongoMockClient

from app.models.leaderboard import LeaderboardEntry

TEST_DB_NAME = "leaderboard_test"


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator:
    """
    Provide a clean in-memory MongoDB database for each test.
    """
    client = AsyncMongoMockClient()
    db = client[TEST_DB_NAME]

    yield db

    # Cleanup: drop all collections after test
    collection_names = await db.list_collection_names()
    for collection_name in collection_names:
        await db[collection_name].drop()


@pytest.fixture
def sample_entry_data():
    """Sample leaderboard row as stored in MongoDB."""
    return {
        "_id": "octocat",
        "username": "octocat",
        "avatar": "https://avatars.githubusercontent.com/u/583231?v=4",
        "questions": 5,
        "points": 50,
        "date": "2026-02-23",
    }


@pytest.fixture
def sample_entries():
    """A small leaderboard, in fetch order."""
    return [
        LeaderboardEntry(username="octocat", avatar="a.png", questions=45, points=920, date="2026-02-24"),
        LeaderboardEntry(username="devrohith", avatar="b.png", questions=38, points=870, date="2026-02-24"),
        LeaderboardEntry(username="codemaster", avatar="c.png", questions=30, points=820, date="2026-02-23"),
        LeaderboardEntry(username="bughunter", avatar="d.png", questions=28, points=780, date="2026-02-24"),
        LeaderboardEntry(username="stackninja", avatar="e.png", questions=20, points=700, date="2026-02-23"),
    ]
