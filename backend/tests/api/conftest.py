"""API test fixtures: FastAPI app with the store dependency overridden.

Invariants:
    - get_store returns the in-memory FakeStore from the root conftest
    - The lifespan is not run, so no real store connection is attempted
"""

import pytest
from httpx import ASGITransport, AsyncClient

from docbrowser.api.dependencies import get_query_timeout, get_store
from docbrowser.main import app


@pytest.fixture
def query_timeout():
    return {"seconds": 5.0}


@pytest.fixture
async def client(store, query_timeout):
    """FastAPI test client backed by the fake store."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_query_timeout] = lambda: query_timeout["seconds"]

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
