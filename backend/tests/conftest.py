"""
StudyMate Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── partners_collection / requests_collection: motor collection doubles
    ├── mock_db: database double; db["partners"] → partners_collection
    ├── test_app: fresh FastAPI app with get_database overridden
    └── test_client: HTTPX AsyncClient talking to test_app in-process

No MongoDB server is needed: every store call hits an AsyncMock.
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URI"] = "mongodb://test-host:27017"
os.environ["MONGO_DB_NAME"] = "studyMateTest"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RETRY_MAX_ATTEMPTS"] = "1"

from datetime import datetime, timezone
from typing import Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Store Doubles
# ══════════════════════════════════════════════════════════════════════════

def make_cursor(documents: Iterable[dict] = ()) -> MagicMock:
    """
    A motor cursor double.

    sort() and limit() return the same cursor so chained calls can be
    asserted on one object; to_list() is awaited for the documents.
    """
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents))
    return cursor


def make_collection() -> MagicMock:
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.find = MagicMock(return_value=make_cursor())
    return collection


def insert_result(inserted_id: Optional[ObjectId] = None) -> MagicMock:
    return MagicMock(acknowledged=True, inserted_id=inserted_id or ObjectId())


def update_result(matched: int = 1, modified: int = 1) -> MagicMock:
    return MagicMock(
        acknowledged=True,
        matched_count=matched,
        modified_count=modified,
        upserted_id=None,
    )


def delete_result(deleted: int = 1) -> MagicMock:
    return MagicMock(acknowledged=True, deleted_count=deleted)


def partner_document(**overrides) -> dict:
    """A partner document as motor returns it (ObjectId, camelCase keys)."""
    document = {
        "_id": ObjectId(),
        "name": "Ayesha Rahman",
        "profileImage": "https://i.ibb.co/avatar.png",
        "subject": "Mathematics",
        "studyMode": "Online",
        "availabilityTime": "Evening 6-9 PM",
        "location": "Dhaka",
        "experienceLevel": "Intermediate",
        "rating": 4.5,
        "email": "ayesha@example.com",
        "partnerCount": 0,
        "createdAt": datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc),
    }
    document.update(overrides)
    return document


def request_document(**overrides) -> dict:
    document = {
        "_id": ObjectId(),
        "partnerId": str(ObjectId()),
        "userEmail": "sender@example.com",
        "partnerName": "Ayesha Rahman",
        "subject": "Mathematics",
        "createdAt": datetime(2025, 1, 16, 9, 30, tzinfo=timezone.utc),
    }
    document.update(overrides)
    return document


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def partners_collection():
    return make_collection()


@pytest.fixture
def requests_collection():
    return make_collection()


@pytest.fixture
def mock_db(partners_collection, requests_collection):
    """
    Database double: indexing by collection name returns the matching
    collection double, like AsyncIOMotorDatabase["partners"].
    """
    collections = {
        "partners": partners_collection,
        "requests": requests_collection,
    }
    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    return db


@pytest.fixture
def test_app(mock_db):
    """A fresh app per test, with the database dependency replaced."""
    from app.database import get_database
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: mock_db
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient configured to talk to the app in-process.

    ASGITransport does not run the lifespan, so no MongoDB client is created.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
