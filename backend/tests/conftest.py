"""
Shared fixtures: an in-memory stand-in for the motor trips collection and a
TestClient wired to it.
"""

import copy
import os
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")

from app.core.security import create_access_token
from app.main import app
from app.router.trip import get_collection

OWNER_ID = "user_alice"
OTHER_OWNER_ID = "user_bob"


class FakeCursor:
    def __init__(self, docs: list[dict]):
        self._docs = docs

    def sort(self, key: str, direction: int):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeTripsCollection:
    """
    Implements just the motor collection calls the trip service makes.
    Queries are plain equality matches.
    """

    def __init__(self):
        self.docs: list[dict] = []

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    async def insert_one(self, doc: dict):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: dict):
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._matches(d, query)])

    async def find_one(self, query: dict):
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def find_one_and_update(self, query: dict, update: dict, return_document=False):
        for doc in self.docs:
            if self._matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(copy.deepcopy(update.get("$set", {})))
                return copy.deepcopy(doc) if return_document else before
        return None

    async def delete_one(self, query: dict):
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def trips_collection():
    return FakeTripsCollection()


@pytest.fixture
def client(trips_collection):
    app.dependency_overrides[get_collection] = lambda: trips_collection
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(owner_id: str = OWNER_ID) -> dict:
    return {"Authorization": f"Bearer {create_access_token(owner_id)}"}


@pytest.fixture
def headers():
    return auth_headers(OWNER_ID)


@pytest.fixture
def other_headers():
    return auth_headers(OTHER_OWNER_ID)


@pytest.fixture
def paris_payload():
    return {
        "destination": "Paris",
        "country": "France",
        "startDate": "2024-06-15",
        "endDate": "2024-06-22",
        "budget": {"amount": 1000, "currency": "USD"},
    }
