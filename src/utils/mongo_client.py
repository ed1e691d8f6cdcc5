"""
MongoDB connection wrapper used by the bookstore query groups.
"""

import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = logging.getLogger(__name__)


class MongoDBClient:
    """A scoped connection to one MongoDB server and default database."""

    def __init__(
        self,
        connection_string: str = "mongodb://localhost:27017",
        database_name: Optional[str] = None,
    ):
        """
        Initialize the MongoDB client.

        Args:
            connection_string: MongoDB connection URI
            database_name: Optional default database name
        """
        self.connection_string = connection_string
        self.client: Optional[MongoClient] = None
        self.database_name = database_name

    @property
    def is_connected(self) -> bool:
        """Whether a live MongoClient is held."""
        return self.client is not None

    def connect(self) -> MongoClient:
        """
        Establish connection to MongoDB and verify the server answers.

        MongoClient connects lazily, so a ping is issued here to make an
        unreachable server fail at connect time rather than on the first query.

        Returns:
            MongoClient instance
        """
        if self.client is None:
            client = MongoClient(self.connection_string)
            try:
                client.admin.command("ping")
            except Exception:
                client.close()
                raise
            self.client = client
            logger.info("Connected to MongoDB")
        return self.client

    def close(self) -> None:
        """Close the MongoDB connection. Calling it twice is a no-op."""
        if self.client:
            self.client.close()
            self.client = None

    def get_database(self, database_name: Optional[str] = None) -> Database:
        """
        Get a database instance.

        Args:
            database_name: Name of the database (uses default if not provided)

        Returns:
            Database instance
        """
        db_name = database_name or self.database_name
        if not db_name:
            raise ValueError("Database name must be provided")
        self.connect()
        return self.client[db_name]

    def get_collection(
        self, collection_name: str, database_name: Optional[str] = None
    ) -> Collection:
        """
        Get a collection instance.

        Args:
            collection_name: Name of the collection
            database_name: Name of the database (uses default if not provided)

        Returns:
            Collection instance
        """
        db = self.get_database(database_name)
        return db[collection_name]

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
