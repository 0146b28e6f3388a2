"""Seed the target collection: clear it, ensure indexes, insert documents."""
import logging
from typing import Any, List, Optional, Sequence

from pymongo import ASCENDING, GEOSPHERE
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from geoquery.exceptions import SeedError
from geoquery.reporter import ConsoleReporter

logger = logging.getLogger("geoquery.seeder")

# (field, index type, description, options)
INDEXES = (
    ("name", ASCENDING, "unique", {"unique": True}),
    ("geom", GEOSPHERE, "2dsphere", {}),
)


async def clear_data(collection: AsyncCollection, reporter: ConsoleReporter) -> int:
    """Remove all documents from the collection and return how many were removed."""
    reporter.clearing(collection.name)
    try:
        result = await collection.delete_many({})
    except PyMongoError as e:
        raise SeedError(f"Failed to clear collection {collection.name!r}: {e}") from e
    return result.deleted_count


async def ensure_indexes(collection: AsyncCollection, reporter: ConsoleReporter) -> List[str]:
    """Create the unique index on "name" and the 2dsphere index on "geom".

    A failing index request is logged and skipped; insertion still proceeds.
    Returns the names of the indexes that were created (or already existed).
    """
    created = []
    for field, index_type, description, options in INDEXES:
        reporter.ensuring_index(description, field, collection.name)
        try:
            created.append(await collection.create_index([(field, index_type)], **options))
        except PyMongoError as e:
            logger.warning("Could not create %s index on %r: %s", description, field, e)
    return created


async def insert_sample_data(
    collection: AsyncCollection,
    documents: Sequence[dict[str, Any]],
    reporter: ConsoleReporter,
) -> List[Any]:
    """Insert the documents in bulk and return their ids."""
    reporter.inserting(collection.name, documents)
    try:
        # insert_many sets _id on the dicts it gets; keep the caller's clean
        result = await collection.insert_many([dict(doc) for doc in documents])
    except PyMongoError as e:
        raise SeedError(f"Failed to insert documents in {collection.name!r}: {e}") from e
    return list(result.inserted_ids)


async def seed(
    collection: AsyncCollection,
    documents: Sequence[dict[str, Any]],
    reporter: Optional[ConsoleReporter] = None,
) -> List[Any]:
    """Clear, index and insert, in that order."""
    reporter = reporter or ConsoleReporter()
    removed = await clear_data(collection, reporter)
    logger.debug("Removed %d documents from %s", removed, collection.name)
    await ensure_indexes(collection, reporter)
    return await insert_sample_data(collection, documents, reporter)
