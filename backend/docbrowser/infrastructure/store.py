"""Store Client: one long-lived MongoDB connection bound to a named database.

Invariants:
    - connect_store() returns only after both the connect and the ping phase succeed
    - Each startup phase is bounded by its own timeout; failure raises StoreUnavailableError
    - A StoreHandle is never rebound to another database after construction
    - The underlying AsyncMongoClient is shared by all requests (the driver pools connections)

Design Decisions:
    - The app owns the handle on app.state; routes receive it through Depends(get_store)
    - No startup retries beyond the driver's server selection within the phase timeout
"""

import asyncio
import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from docbrowser.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class StoreHandle:
    """Read-only handle to one database of a connected store."""

    def __init__(self, client: AsyncMongoClient, database: AsyncDatabase):
        self._client = client
        self._database = database

    @property
    def name(self) -> str:
        return self._database.name

    @property
    def database(self) -> AsyncDatabase:
        return self._database

    def collection(self, name: str) -> AsyncCollection:
        return self._database.get_collection(name)

    async def ping(self) -> None:
        await self._client.admin.command("ping")

    async def health_check(self, timeout: float) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with asyncio.timeout(timeout):
                await self.ping()
            return True
        except (PyMongoError, TimeoutError) as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def close(self) -> None:
        await self._client.close()


async def connect_store(
    url: str,
    database: str,
    connect_timeout: float = 10.0,
    ping_timeout: float = 10.0,
) -> StoreHandle:
    """Open the store connection and verify liveness, or raise StoreUnavailableError."""
    logger.info(f"using database {database!r}", extra={"database": database})
    try:
        client = AsyncMongoClient(
            url,
            connectTimeoutMS=int(connect_timeout * 1000),
            serverSelectionTimeoutMS=server_selection_timeout_ms(ping_timeout),
        )
    except PyMongoError as e:
        logger.error(f"Store connect failed: {e}", extra={"phase": "connect"})
        raise StoreUnavailableError("connect", str(e)) from e

    try:
        handle = StoreHandle(client, client.get_database(database))
    except PyMongoError as e:
        logger.error(f"Invalid database {database!r}: {e}", extra={"phase": "connect"})
        await client.close()
        raise StoreUnavailableError("connect", str(e)) from e

    try:
        logger.info("connecting to database", extra={"phase": "connect"})
        await _run_phase("connect", client.aconnect(), connect_timeout)
        logger.info("pinging database", extra={"phase": "ping"})
        await _run_phase("ping", handle.ping(), ping_timeout)
    except StoreUnavailableError:
        await client.close()
        raise
    return handle


def server_selection_timeout_ms(ping_timeout: float) -> int:
    """Driver selection deadline, kept inside the ping phase so its error surfaces first."""
    margin = min(0.5, ping_timeout / 4)
    return int((ping_timeout - margin) * 1000)


async def _run_phase(phase: str, operation, timeout: float) -> None:
    try:
        async with asyncio.timeout(timeout):
            await operation
    except TimeoutError as e:
        logger.error(f"Store {phase} timed out after {timeout}s", extra={"phase": phase})
        raise StoreUnavailableError(phase, f"timed out after {timeout}s") from e
    except PyMongoError as e:
        logger.error(f"Store {phase} failed: {e}", extra={"phase": phase})
        raise StoreUnavailableError(phase, str(e)) from e
