"""Read-only geospatial queries against the seeded collection."""
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from geoquery.exceptions import QueryError
from geoquery.reporter import ConsoleReporter
from geoquery.utils.geo import AreaFunction, geometry_area

logger = logging.getLogger("geoquery.queries")


@dataclass(frozen=True)
class AreaResult:
    name: str
    area: float  # m2


def near_filter(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Documents other than ``doc``, sorted by distance to its geometry."""
    return {
        "name": {"$ne": doc["name"]},
        "geom": {"$near": {"$geometry": doc["geom"]}},
    }


def within_filter(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Documents other than ``doc`` lying entirely inside its geometry."""
    return {
        "name": {"$ne": doc["name"]},
        "geom": {"$geoWithin": {"$geometry": doc["geom"]}},
    }


async def find_areas(
    collection: AsyncCollection,
    reporter: Optional[ConsoleReporter] = None,
    area_fn: AreaFunction = geometry_area,
) -> List[AreaResult]:
    """Find every Polygon document and calculate its area.

    MongoDB only filters here; the area itself comes from ``area_fn``.
    """
    reporter = reporter or ConsoleReporter()
    reporter.areas_header()
    try:
        docs = await collection.find({"geom.type": "Polygon"}).to_list()
    except PyMongoError as e:
        raise QueryError(f"Failed to fetch polygons: {e}") from e

    results = []
    for doc in docs:
        result = AreaResult(name=doc["name"], area=area_fn(doc["geom"]))
        reporter.area(result.name, result.area)
        results.append(result)
    return results


async def find_closest_object(
    collection: AsyncCollection,
    doc: Mapping[str, Any],
    reporter: Optional[ConsoleReporter] = None,
) -> Optional[dict[str, Any]]:
    """Find the object closest to ``doc``, or None if there is no other object."""
    reporter = reporter or ConsoleReporter()
    reporter.closest_header(doc["name"])
    try:
        closest = await collection.find_one(near_filter(doc))
    except PyMongoError as e:
        raise QueryError(f"Failed to find closest object to {doc['name']}: {e}") from e

    reporter.closest(closest)
    return closest


async def find_objects_within(
    collection: AsyncCollection,
    doc: Mapping[str, Any],
    reporter: Optional[ConsoleReporter] = None,
) -> List[dict[str, Any]]:
    """Find the objects within ``doc`` (expected to be a Polygon)."""
    reporter = reporter or ConsoleReporter()
    reporter.within_header(doc["name"])
    if doc["geom"].get("type") != "Polygon":
        logger.warning("%s is a %s, $geoWithin expects a Polygon", doc["name"], doc["geom"].get("type"))
    try:
        docs = await collection.find(within_filter(doc)).to_list()
    except PyMongoError as e:
        raise QueryError(f"Failed to find objects within {doc['name']}: {e}") from e

    reporter.within(docs)
    return docs
