"""Root conftest: shared test configuration and the in-memory store fixture."""

import os

import pytest

from tests.mock_store import FakeStore, make_ids

# Ensure tests never reach a real store
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:1")
os.environ.setdefault("DATABASE", "example")


@pytest.fixture
def user_ids():
    return make_ids(3)


@pytest.fixture
def store(user_ids):
    """Fake store: `users` holds 3 documents, `orders` is empty."""
    return FakeStore(
        "example",
        {
            "users": [
                {"_id": user_ids[0], "name": "ada", "age": 36},
                {"_id": user_ids[1], "name": "grace", "tags": ["navy", "cobol"]},
                {"_id": user_ids[2], "name": "linus", "address": {"city": "Portland"}},
            ],
            "orders": [],
        },
    )
