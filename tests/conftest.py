import os

# Settings() reads these at import time
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("SESSION_SECRET", "test-secret-test-secret-test-secret-0123")
os.environ.setdefault("ENVIRONMENT", "test")

import re
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from clarityweb.main import app
from clarityweb.services.session_service import SessionStore
from clarityweb.utils.constants import SESSION_COOKIE_NAME

TEST_SECRET = os.environ["SESSION_SECRET"]


def _matches(doc, query):
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(doc, branch) for branch in condition):
                return False
        elif isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not re.search(condition["$regex"], doc.get(key) or "", flags):
                return False
        elif doc.get(key) != condition:
            return False
    return True


def _project(doc, projection):
    if projection is None:
        return dict(doc)
    # Mongo keeps _id unless it is excluded explicitly
    projected = {"_id": doc["_id"]}
    projected.update({key: doc[key] for key in projection if key in doc})
    return projected


def _apply_set(doc, changes):
    for key, value in changes.items():
        if isinstance(value, dict) and "$not" in value:
            value = not doc.get(value["$not"][0].lstrip("$"))
        target = doc
        *parents, leaf = key.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value


class InMemoryCollection:
    """
    The subset of a Motor collection the endpoints use.
    """

    def __init__(self, docs=None):
        self.docs = [dict(doc) for doc in docs or []]
        for doc in self.docs:
            doc.setdefault("_id", ObjectId())

    def _match(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return doc
        return None

    async def find_one(self, query, projection=None):
        doc = self._match(query)
        if doc is None:
            return None
        return _project(doc, projection)

    async def update_one(self, query, update):
        doc = self._match(query)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        before = repr(doc)
        _apply_set(doc, update.get("$set", {}))
        return SimpleNamespace(matched_count=1, modified_count=int(repr(doc) != before))

    async def find_one_and_update(self, query, update, projection=None, return_document=None):
        doc = self._match(query)
        if doc is None:
            return None
        # a list is an aggregation pipeline of $set stages
        stages = update if isinstance(update, list) else [update]
        for stage in stages:
            _apply_set(doc, stage.get("$set", {}))
        return _project(doc, projection)

    async def delete_one(self, query):
        doc = self._match(query)
        if doc is not None:
            self.docs.remove(doc)
        return SimpleNamespace(deleted_count=int(doc is not None))

    async def count_documents(self, query):
        return sum(1 for doc in self.docs if _matches(doc, query))

    def find(self, query):
        return InMemoryCursor([dict(doc) for doc in self.docs if _matches(doc, query)])


class InMemoryCursor:
    def __init__(self, docs):
        self.docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key, direction):
        self.docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def skip(self, count):
        self._skip = count
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        docs = self.docs[self._skip:]
        return docs[:self._limit] if self._limit else docs


class FakeConnector:
    """
    Stands in for DatabaseConnector; counts how often storage was reached.
    """

    def __init__(self, users=None, simplifications=None, error=None):
        self._users = users if users is not None else InMemoryCollection()
        self._simplifications = simplifications if simplifications is not None else InMemoryCollection()
        self._error = error
        self.calls = 0
        self.is_connected = False

    async def acquire(self):
        self.calls += 1
        if self._error is not None:
            raise self._error
        self.is_connected = True
        return SimpleNamespace()

    async def users(self):
        await self.acquire()
        return self._users

    async def simplifications(self):
        await self.acquire()
        return self._simplifications

    async def check_health(self):
        return self._error is None

    async def close(self):
        self.is_connected = False


def _created(day):
    return datetime(2025, 3, day, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def session_store():
    return SessionStore(TEST_SECRET, max_age_seconds=3600)


@pytest.fixture
def users():
    return InMemoryCollection([
        {"email": "ada@example.com", "name": "Ada", "onboardingCompleted": True},
        {"email": "bob@example.com", "name": "Bob"},
    ])


@pytest.fixture
def simplifications(users):
    ada, bob = (doc["_id"] for doc in users.docs)
    statistics = {
        "fleschBefore": 31.2, "fleschAfter": 72.5,
        "wordsCountBefore": 120, "wordsCountAfter": 80,
        "readingTimeBefore": 0.6, "readingTimeAfter": 0.4,
    }
    return InMemoryCollection([
        {
            "userId": ada, "mode": "simple", "isFavorite": False, "createdAt": _created(1),
            "originalText": "The feline reclined upon the mat.",
            "simplifiedText": "The cat sat on the mat.",
            "statistics": statistics,
        },
        {
            "userId": ada, "mode": "accessible", "isFavorite": True, "createdAt": _created(2),
            "originalText": "Photosynthesis converts light energy into chemical energy.",
            "simplifiedText": "Plants turn sunlight into food.",
            "statistics": statistics,
        },
        {
            "userId": ada, "mode": "summary", "isFavorite": False, "createdAt": _created(3),
            "originalText": "A long article about tides and the moon.",
            "simplifiedText": "The moon pulls the sea.",
            "sourceUrl": "https://example.com/tides",
            "statistics": statistics,
        },
        {
            "userId": bob, "mode": "simple", "isFavorite": True, "createdAt": _created(4),
            "originalText": "Bob's private note about the cat.",
            "simplifiedText": "Bob's note.",
            "statistics": statistics,
        },
    ])


@pytest.fixture
def make_connector():
    return FakeConnector


@pytest.fixture
def connector(users, simplifications):
    return FakeConnector(users, simplifications)


@pytest.fixture
def extractor():
    return SimpleNamespace()


@pytest.fixture
def client(session_store, connector, extractor):
    # no lifespan: state is wired by hand
    app.state.session_store = session_store
    app.state.db_connector = connector
    app.state.extractor = extractor
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def login(client, session_store):
    """Sets a valid session cookie for the given account on the test client."""
    def _login(email="ada@example.com", name="Ada", cookie_name=SESSION_COOKIE_NAME):
        client.cookies.set(cookie_name, session_store.issue_token(email, name))
        return client
    return _login
