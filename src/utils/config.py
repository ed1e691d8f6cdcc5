"""
Store configuration for the bookstore query runner.

Values come from the environment (optionally via a .env file) and fall back to
a local MongoDB instance with the plp_bookstore database.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_CONNECTION_STRING = "mongodb://localhost:27017"
DEFAULT_DATABASE_NAME = "plp_bookstore"
DEFAULT_COLLECTION_NAME = "books"


@dataclass(frozen=True)
class StoreConfig:
    """Where the books collection lives."""

    connection_string: str = DEFAULT_CONNECTION_STRING
    database_name: str = DEFAULT_DATABASE_NAME
    collection_name: str = DEFAULT_COLLECTION_NAME

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """
        Build a config from MONGO_URI, DB_NAME and COLLECTION_NAME.

        Unset or empty variables use the defaults.
        """
        load_dotenv()
        return cls(
            connection_string=os.getenv("MONGO_URI") or DEFAULT_CONNECTION_STRING,
            database_name=os.getenv("DB_NAME") or DEFAULT_DATABASE_NAME,
            collection_name=os.getenv("COLLECTION_NAME") or DEFAULT_COLLECTION_NAME,
        )
