"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.database import Database


@pytest.fixture
async def client(test_db):
    """
    HTTP client for testing API endpoints.

    Points the Database singleton at the test database.
    """
    # Store original db connection
    original_db = Database.db
    Database.db = test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    # Restore original db
    Database.db = original_db


@pytest.fixture
async def seeded_db(test_db, sample_entries):
    """Test database holding the sample leaderboard."""
    for entry in sample_entries:
        await test_db["leaderboard"].insert_one({"_id": entry.username, **entry.model_dump()})
    return test_db
