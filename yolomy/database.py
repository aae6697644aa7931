"""
Yolomy Products Backend — Database Connection Handle
=====================================================

What:  An explicitly constructed MongoDB connection handle plus the FastAPI
       dependency that hands it to request handlers.
How:   `DatabaseConnection` registers a mongoengine connection under its own
       alias and hands out collections of that connection's database. The
       repository builds its querysets on those collections, so the handle
       it is given is the one it talks to.
Who:   Created and closed by the application lifespan (main.py); stored on
       `app.state.database`; injected into `ProductRepository` per request.

Connection Model:
    pymongo's MongoClient owns a thread-safe connection pool. One handle is
    shared by every request in the process; it is created at startup and
    disconnected at shutdown. The client connects lazily, so constructing the
    handle never blocks on the network. `ping()` is the explicit probe.
"""

import logging
from typing import Any, Optional

import mongoengine
from fastapi import Request
from mongoengine.connection import get_db
from pymongo import MongoClient
from pymongo.collection import Collection

from yolomy.config import Settings

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Owns one mongoengine connection alias and its MongoClient.

    Args:
        uri:            mongodb:// URI; the path component names the database.
        alias:          mongoengine alias to register the connection under.
        client_options: Extra keyword arguments for mongoengine.connect()
                        (e.g. serverSelectionTimeoutMS, mongo_client_class).
    """

    def __init__(self, uri: str, alias: str, **client_options: Any):
        self.uri = uri
        self.alias = alias
        self.client_options = client_options
        self.client: Optional[MongoClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseConnection":
        return cls(
            settings.mongodb_uri,
            alias=settings.db_alias,
            serverSelectionTimeoutMS=settings.db_server_selection_timeout_ms,
        )

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    def connect(self) -> "DatabaseConnection":
        """Register the alias with mongoengine and create the pooled client."""
        if self.client is None:
            self.client = mongoengine.connect(
                host=self.uri,
                alias=self.alias,
                **self.client_options,
            )
            logger.info("Database connection registered (alias=%s)", self.alias)
        return self

    def collection(self, name: str) -> Collection:
        """
        Return a collection of this handle's database.

        Raises:
            mongoengine.connection.ConnectionFailure: the handle is closed.
        """
        return get_db(self.alias)[name]

    def ping(self) -> None:
        """
        Round-trip to the server.

        Raises:
            RuntimeError: the handle was never connected.
            pymongo.errors.PyMongoError: the server is unreachable.
        """
        if self.client is None:
            raise RuntimeError(f"Database connection '{self.alias}' is not open")
        self.client.admin.command("ping")

    def close(self) -> None:
        """Disconnect the alias and close the pooled client."""
        if self.client is not None:
            mongoengine.disconnect(alias=self.alias)
            self.client = None
            logger.info("Database connection closed (alias=%s)", self.alias)


# ── Request Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> DatabaseConnection:
    """
    FastAPI dependency returning the process-wide handle.

    The lifespan stores the handle on `app.state.database`; tests assign a
    mongomock-backed handle there directly.
    """
    return request.app.state.database
