from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


@dataclass
class MongoConfig:
    uri: Optional[str]
    database: str
    server_selection_timeout_ms: int = 5000


class DatabaseConnection:
    """MongoDB connection holder.

    Note: ``is_connected()`` is the capability probe the switching store asks
    on every call; it stays False until ``connect()`` succeeds and after
    ``close()``.
    """

    def __init__(self, config: MongoConfig, *, client_factory: Callable[..., Any] = MongoClient):
        self._config = config
        self._client_factory = client_factory
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    @property
    def configured(self) -> bool:
        return bool(self._config.uri)

    def connect(self) -> bool:
        """Open the client and ping the server.

        Returns False when no URI is configured. Raises StoreUnavailable when a
        URI is configured but the server cannot be reached.
        """
        if not self._config.uri:
            logger.warning("No MongoDB URI provided, running with in-memory store")
            return False

        try:
            client = self._client_factory(
                self._config.uri,
                serverSelectionTimeoutMS=int(self._config.server_selection_timeout_ms),
            )
            client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            raise StoreUnavailable(f"MongoDB connection failed: {e}") from e

        self._client = client
        self._db = client.get_default_database(default=self._config.database)
        logger.info("MongoDB connected (database=%s)", self._db.name)
        return True

    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def db(self) -> Database:
        if self._db is None:
            raise StoreUnavailable("MongoDB is not connected")
        return self._db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None
