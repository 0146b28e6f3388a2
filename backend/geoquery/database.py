"""MongoDB connection handling."""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from geoquery.exceptions import DatabaseConnectionError

logger = logging.getLogger("geoquery.database")

DEFAULT_DATABASE_NAME = "mongodb-geospatial-queries"


@dataclass
class MongoConnection:
    """Open client plus the database selected by the URI."""

    uri: str
    client: AsyncMongoClient
    db: AsyncDatabase

    def collection(self, name: str) -> AsyncCollection:
        return self.db[name]

    async def close(self) -> None:
        await self.client.close()


async def connect(uri: str, server_selection_timeout_ms: Optional[int] = None) -> MongoConnection:
    """Open a connection and make sure the server answers.

    The client connects lazily, so a ping is issued to surface an
    unreachable server here instead of on the first query.
    """
    kwargs = {}
    if server_selection_timeout_ms is not None:
        kwargs["serverSelectionTimeoutMS"] = server_selection_timeout_ms

    try:
        client = AsyncMongoClient(uri, **kwargs)
    except (ConfigurationError, ValueError) as e:
        raise DatabaseConnectionError(uri, str(e)) from e

    try:
        await client.admin.command("ping")
        db = client.get_default_database(default=DEFAULT_DATABASE_NAME)
    except PyMongoError as e:
        await client.close()
        raise DatabaseConnectionError(uri, str(e)) from e

    logger.debug("Connected to %s (database %s)", uri, db.name)
    return MongoConnection(uri=uri, client=client, db=db)


@asynccontextmanager
async def mongo_connection(
    uri: str, server_selection_timeout_ms: Optional[int] = None
) -> AsyncIterator[MongoConnection]:
    """Context manager that closes the connection on exit.

    Usage:
        async with mongo_connection(uri) as conn:
            await conn.collection("test").count_documents({})
    """
    conn = await connect(uri, server_selection_timeout_ms)
    try:
        yield conn
    finally:
        await conn.close()
