"""Database connectivity layer for Casework."""

from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from casework.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Lazily establishes the MongoDB connection used by ``MongoStorage``."""

    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or default_settings
        self.mongodb: Optional[AsyncIOMotorClient] = None

    async def initialize(self) -> None:
        """Connect to MongoDB."""

        logger.info("Initializing Casework database manager")
        self.mongodb = AsyncIOMotorClient(str(self.settings.MONGODB_URL), tz_aware=True)
        logger.info("Database manager initialized")

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self.mongodb is None:
            raise RuntimeError("Database manager is not initialized")
        return self.mongodb[self.settings.MONGODB_DATABASE]

    async def close(self) -> None:
        """Tear down connections gracefully."""

        logger.info("Closing database connections")

        if self.mongodb is not None:
            self.mongodb.close()
            self.mongodb = None


# Singleton instance used by the application lifespan
database_manager = DatabaseManager()
