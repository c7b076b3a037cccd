"""
MongoDB connection used by the ``mongo`` storage backend.
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database as MongoDatabase

from ecomission.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """MongoDB database connection manager."""

    client: Optional[MongoClient] = None
    db: Optional[MongoDatabase] = None

    @classmethod
    def connect(cls):
        """Connect to MongoDB."""
        settings = get_settings()
        cls.client = MongoClient(settings.MONGO_URI)
        cls.db = cls.client[settings.MONGO_DB_NAME]

        cls._create_indexes()

        logger.info(f"Connected to MongoDB: {settings.MONGO_DB_NAME}")

    @classmethod
    def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    def _create_indexes(cls):
        """One document per storage key."""
        settings = get_settings()
        cls.db[settings.MONGO_COLLECTION].create_index("key", unique=True)

    @classmethod
    def get_collection(cls, name: str) -> Collection:
        """Get a collection by name, connecting lazily."""
        if cls.db is None:
            cls.connect()
        return cls.db[name]
