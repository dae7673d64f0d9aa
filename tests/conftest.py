"""Pytest configuration and fixtures."""

from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import BulkWriteError, DuplicateKeyError, ServerSelectionTimeoutError

from scavenger_hunt.api.dependencies import clear_dependency_caches
from scavenger_hunt.api.server import app, limiter
from scavenger_hunt.core.settings import AppSettings, reload_settings
from scavenger_hunt.core.settings.app_settings import (
    APIServerSettings,
    LoggingSettings,
    MongoSettings,
)


class FakeCollection:
    """In-memory stand-in for the subset of the pymongo collection API the service uses."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.unique_keys: set[str] = set()

    @staticmethod
    def _matches(document: dict[str, Any], query: dict[str, Any] | None) -> bool:
        for key, value in (query or {}).items():
            if key == "$or":
                if not any(FakeCollection._matches(document, clause) for clause in value):
                    return False
            elif document.get(key) != value:
                return False
        return True

    def create_index(self, key: str, unique: bool = False, **kwargs: Any) -> str:
        if unique:
            self.unique_keys.add(key)
        return f"{key}_1"

    def find_one(self, query: dict[str, Any] | None = None) -> dict[str, Any] | None:
        for document in self.documents:
            if self._matches(document, query):
                return dict(document)
        return None

    def find(self, query: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return [dict(document) for document in self.documents if self._matches(document, query)]

    def count_documents(self, query: dict[str, Any], **kwargs: Any) -> int:
        return len(self.find(query))

    def insert_one(self, document: dict[str, Any]) -> MagicMock:
        for key in self.unique_keys:
            if any(existing.get(key) == document.get(key) for existing in self.documents):
                raise DuplicateKeyError(f"E11000 duplicate key error on {key}", 11000)
        stored = dict(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return MagicMock(inserted_id=stored["_id"])

    def insert_many(self, documents: list[dict[str, Any]], ordered: bool = True) -> MagicMock:
        errors = []
        for index, document in enumerate(documents):
            try:
                self.insert_one(document)
            except DuplicateKeyError as e:
                errors.append({"index": index, "code": 11000, "errmsg": str(e)})
                if ordered:
                    break
        if errors:
            raise BulkWriteError({"writeErrors": errors, "nInserted": len(documents) - len(errors)})
        return MagicMock()

    def update_one(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
    ) -> MagicMock:
        for document in self.documents:
            if self._matches(document, query):
                document.update(update.get("$set", {}))
                return MagicMock(matched_count=1)
        if upsert:
            new_document = {key: value for key, value in query.items() if not key.startswith("$")}
            new_document.update(update.get("$set", {}))
            self.insert_one(new_document)
        return MagicMock(matched_count=0)


class FakeDatabase:
    """In-memory stand-in for a pymongo database."""

    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def fake_db() -> FakeDatabase:
    """
    Create an empty in-memory database.

        FakeDatabase: Fake database instance.
    """
    return FakeDatabase()


@pytest.fixture
def broken_db() -> MagicMock:
    """
    Create a database whose every collection operation fails.

        MagicMock: Database mock raising PyMongoError subclasses.
    """
    collection = MagicMock()
    collection.name = "broken"
    error = ServerSelectionTimeoutError("No servers available")
    for method in (
        "find_one",
        "find",
        "count_documents",
        "insert_one",
        "insert_many",
        "update_one",
        "create_index",
    ):
        getattr(collection, method).side_effect = error

    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


@pytest.fixture
def paid_payment() -> dict[str, Any]:
    """
    Payment document with status PAID.

        dict[str, Any]: Payment document.
    """
    return {
        "registrationId": "AB123449",
        "status": "PAID",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "amount": 150,
        "orderId": "order_123",
        "bankingName": "A LOVELACE",
        "timestamp": datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def mock_settings() -> AppSettings:
    """
    Create mock application settings for testing.

        AppSettings: Mock settings instance.
    """
    return AppSettings(
        api_server=APIServerSettings(
            host="127.0.0.1",
            port=8000,
            workers=1,
            cors_allow_origins=["http://localhost:3000"],
            rate_limit="100/minute",
        ),
        mongo=MongoSettings(uri="mongodb://localhost:27017", database="hunt-test"),
        logging=LoggingSettings(
            log_level="DEBUG",
            log_format="%(message)s",
        ),
    )


@pytest.fixture(autouse=True)
def reset_settings_cache() -> None:
    """
    Reset settings cache before each test.

    """
    reload_settings()


@pytest.fixture(autouse=True)
def reset_dependencies() -> Generator[None, None, None]:
    """
    Reset cached services and the rate limiter around each test.

    """
    clear_dependency_caches()
    limiter.reset()
    yield
    clear_dependency_caches()


@pytest.fixture
def patched_db(fake_db: FakeDatabase) -> Generator[FakeDatabase, None, None]:
    """
    Route every service to the in-memory database.

    Args:
        fake_db (FakeDatabase): Fake database.

    Yields:
        FakeDatabase: The fake database in use.
    """
    with patch("scavenger_hunt.api.dependencies.get_database", return_value=fake_db):
        yield fake_db


@pytest.fixture
def test_client(patched_db: FakeDatabase) -> TestClient:
    """
    Create a test client for the FastAPI application.

    Args:
        patched_db (FakeDatabase): Fake database the services use.

        TestClient: FastAPI test client.
    """
    return TestClient(app)
