"""Runs the demo: connect, seed, query, then clean up."""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from geoquery.config import Settings, get_settings
from geoquery.database import MongoConnection, connect
from geoquery.reporter import ConsoleReporter
from geoquery.sample_data import find_document, sample_documents, validate_documents
from geoquery.services.queries import (
    AreaResult,
    find_areas,
    find_closest_object,
    find_objects_within,
)
from geoquery.services.seeder import seed
from geoquery.utils.geo import AreaFunction, geometry_area

logger = logging.getLogger("geoquery.pipeline")

Connector = Callable[[str, Optional[int]], Awaitable[MongoConnection]]


@dataclass
class PipelineResult:
    """Outcome of one run. ``error`` holds the first failure, if any."""

    error: Optional[BaseException] = None
    inserted_ids: List[Any] = field(default_factory=list)
    areas: List[AreaResult] = field(default_factory=list)
    closest: Optional[dict[str, Any]] = None
    within: List[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


async def close_connection(conn: Optional[MongoConnection]) -> None:
    """Close the connection if one was opened. Never raises."""
    if conn is None:
        return
    try:
        await conn.close()
    except Exception as e:
        logger.warning("Error while closing the MongoDB connection: %s", e)


async def run_pipeline(
    settings: Optional[Settings] = None,
    documents: Optional[Sequence[dict[str, Any]]] = None,
    near_name: Optional[str] = None,
    within_name: Optional[str] = None,
    reporter: Optional[ConsoleReporter] = None,
    area_fn: AreaFunction = geometry_area,
    connector: Connector = connect,
) -> PipelineResult:
    """Run every step in order, stopping at the first error.

    Cleanup always runs exactly once: the error (if any) is reported and the
    connection (if opened) is closed.
    """
    settings = settings or get_settings()
    reporter = reporter or ConsoleReporter()
    near_name = near_name or settings.NEAR_REFERENCE
    within_name = within_name or settings.WITHIN_REFERENCE

    result = PipelineResult()
    conn: Optional[MongoConnection] = None
    try:
        docs = validate_documents(documents if documents is not None else sample_documents())
        near_doc = find_document(docs, near_name)
        within_doc = find_document(docs, within_name)

        conn = await connector(settings.MONGODB_URI, settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS)
        reporter.connected(settings.MONGODB_URI)
        collection = conn.collection(settings.MONGODB_COLLECTION)

        result.inserted_ids = await seed(collection, docs, reporter)
        result.areas = await find_areas(collection, reporter, area_fn)
        result.closest = await find_closest_object(collection, near_doc, reporter)
        result.within = await find_objects_within(collection, within_doc, reporter)
    except Exception as e:
        result.error = e
    finally:
        try:
            reporter.finished(result.error)
        except Exception as e:
            logger.warning("Could not write the final report: %s", e)
        finally:
            await close_connection(conn)

    return result
