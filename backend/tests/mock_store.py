"""Mock Store: in-memory stand-in for StoreHandle and the pymongo async API.

Invariants:
    - FakeStore exposes the StoreHandle surface (name, database, collection, health_check, close)
    - find() is synchronous and returns a cursor; count/find_one/list_collections are async
    - Every store call is recorded in FakeStore.calls; every cursor in FakeStore.cursors
    - failures[operation] raises that exception; delay makes each store step sleep first
"""

import asyncio

from bson import ObjectId


def make_ids(n: int) -> list[ObjectId]:
    """Deterministic, ascending ObjectIds."""
    return [ObjectId(f"{i + 1:024x}") for i in range(n)]


class FakeCursor:
    """Async cursor with close tracking and optional mid-scan failure."""

    def __init__(self, store, docs, fail_at: int | None = None, error=None):
        self._store = store
        self._docs = list(docs)
        self._pos = 0
        self._fail_at = fail_at
        self._error = error
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        await self._store.step()
        if self._fail_at is not None and self._pos >= self._fail_at:
            raise self._error
        if self._pos >= len(self._docs):
            raise StopAsyncIteration
        doc = self._docs[self._pos]
        self._pos += 1
        return doc

    async def close(self):
        self.closed = True


class FakeCollection:

    def __init__(self, store, name: str, docs: list[dict]):
        self._store = store
        self.name = name
        self._docs = docs

    async def count_documents(self, filter):
        await self._store.record("count_documents", filter)
        return len(self._docs)

    def find(self, filter, projection=None, skip=0):
        self._store.calls.append(("find", {"filter": filter, "skip": skip}))
        self._store.raise_if_failing("find")
        docs = self._docs[skip:]
        if projection:
            docs = [
                {k: v for k, v in d.items() if k in projection} for d in docs
            ]
        return self._store.cursor(docs, "find_cursor")

    async def find_one(self, filter):
        await self._store.record("find_one", filter)
        for doc in self._docs:
            if all(doc.get(k) == v for k, v in filter.items()):
                return doc
        return None


class FakeDatabase:

    def __init__(self, store, name: str):
        self._store = store
        self.name = name

    async def list_collections(self):
        await self._store.record("list_collections", {})
        return self._store.cursor(
            [{"name": n, "type": "collection"} for n in self._store.data],
            "list_collections_cursor",
        )

    def get_collection(self, name: str) -> FakeCollection:
        return FakeCollection(self._store, name, self._store.data.get(name, []))


class FakeStore:
    """StoreHandle replacement backed by a dict of collection name -> documents."""

    def __init__(self, name: str, data: dict[str, list[dict]]):
        self.data = data
        self.database = FakeDatabase(self, name)
        self.calls: list[tuple[str, dict]] = []
        self.cursors: list[FakeCursor] = []
        self.failures: dict[str, Exception] = {}
        # cursor name -> (position, error) for failures after some documents
        self.cursor_failures: dict[str, tuple[int, Exception]] = {}
        self.delay = 0.0
        self.healthy = True
        self.closed = False

    @property
    def name(self) -> str:
        return self.database.name

    def collection(self, name: str) -> FakeCollection:
        return self.database.get_collection(name)

    async def step(self):
        if self.delay:
            await asyncio.sleep(self.delay)

    def raise_if_failing(self, operation: str):
        if operation in self.failures:
            raise self.failures[operation]

    async def record(self, operation: str, args: dict):
        self.calls.append((operation, args))
        await self.step()
        self.raise_if_failing(operation)

    def cursor(self, docs, name: str) -> FakeCursor:
        fail_at, error = self.cursor_failures.get(name, (None, None))
        cursor = FakeCursor(self, docs, fail_at, error)
        self.cursors.append(cursor)
        return cursor

    def operations(self) -> list[str]:
        return [op for op, _ in self.calls]

    async def health_check(self, timeout: float) -> bool:
        return self.healthy

    async def close(self):
        self.closed = True
