"""
clarityweb/db/mongo.py

Purpose: MongoDB connection handling

- Lazily creates the Motor client on first use
- Single-flight establishment: concurrent first callers share one attempt
- A failed attempt is forgotten so the next caller retries from scratch
- Health checks and connection lifecycle management
"""

import asyncio
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from clarityweb.core.logging import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"
SIMPLIFICATIONS_COLLECTION = "simplifications"


class DatabaseConnector:
    """
    Owns the process-wide Motor client.

    Created by the application lifespan and handed to request handlers through
    a dependency. No I/O happens until acquire() is first awaited.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[..., AsyncIOMotorClient] = AsyncIOMotorClient,
    ):
        self._uri = uri
        self._db_name = db_name
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None
        self._pending: Optional[asyncio.Future] = None

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def acquire(self) -> AsyncIOMotorDatabase:
        """
        Returns the shared database handle, connecting on first call.

        Raises:
            ConnectionError: If the establishment attempt this caller joined failed
        """
        if self._database is not None:
            return self._database

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._establish())

        pending = self._pending
        try:
            # shield: one cancelled waiter must not cancel the attempt for the others
            client = await asyncio.shield(pending)
        except Exception:
            if self._pending is pending:
                self._pending = None
            raise

        if self._database is None:
            self._client = client
            self._database = client[self._db_name]
        return self._database

    async def users(self) -> AsyncIOMotorCollection:
        """
        Returns the users collection.

        Account fields read or written here:
        - email: str (unique identity key)
        - name: str
        - onboardingCompleted: bool (may be absent on older records)
        - preferences: dict (display settings, may be absent)
        """
        database = await self.acquire()
        return database[USERS_COLLECTION]

    async def simplifications(self) -> AsyncIOMotorCollection:
        """
        Returns the saved simplifications collection.

        Each document belongs to one account through userId (the account _id)
        and is listed newest first by createdAt.
        """
        database = await self.acquire()
        return database[SIMPLIFICATIONS_COLLECTION]

    async def _establish(self) -> AsyncIOMotorClient:
        logger.info(f"🔌 Connecting to MongoDB database '{self._db_name}'...")
        client = self._client_factory(
            self._uri,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            retryWrites=True,
            retryReads=True,
        )
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            logger.error(f"❌ Failed to connect to MongoDB: {e}")
            raise ConnectionError("Could not establish MongoDB connection") from e

        logger.info("✅ MongoDB connection established")
        return client

    async def check_health(self) -> bool:
        """
        Pings the server over the existing connection.

        Returns:
            True if connection is healthy, False otherwise
        """
        if self._client is None:
            return False

        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    async def close(self):
        """
        Closes the MongoDB connection.
        Called during application shutdown.
        """
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

        if self._client is not None:
            logger.info("Closing MongoDB connection")
            self._client.close()
            self._client = None
            self._database = None
            logger.info("⚠️ MongoDB disconnected")
