"""Sample GeoJSON documents used to exercise the geospatial queries.

Each document has a unique "name" and GeoJSON data in the "geom" property.
GeoJSON reference: https://datatracker.ietf.org/doc/html/rfc7946
"""
import copy
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from pydantic import ValidationError

from geoquery.exceptions import FeatureNotFoundError, InvalidFeatureError
from geoquery.schemas.feature import FeatureDocument

logger = logging.getLogger("geoquery.sample_data")

SAMPLE_DOCUMENTS: tuple[dict[str, Any], ...] = (
    {
        "name": "building1",
        "geom": {
            "type": "Polygon",
            "coordinates": [[[10, 10], [20, 40], [8, 35], [4, 12], [10, 10]]],
        },
    },
    {
        "name": "building2",
        "geom": {
            "type": "Polygon",
            "coordinates": [[[40, 10], [30, 20], [40, 30], [35, 40], [60, 50], [80, 35], [60, 20], [40, 10]]],
        },
    },
    {
        "name": "building3",
        "geom": {
            "type": "Polygon",
            "coordinates": [[[95, 10], [95, 20], [135, 20], [135, 20], [95, 10]]],
        },
    },
    {"name": "pedestrian1", "geom": {"type": "Point", "coordinates": [70, 10]}},
    {"name": "pedestrian2", "geom": {"type": "Point", "coordinates": [30, 30]}},
    {"name": "pedestrian3", "geom": {"type": "Point", "coordinates": [70, 35]}},
    {"name": "pedestrian4", "geom": {"type": "Point", "coordinates": [60, 35]}},
    {
        "name": "bordureRoute1",
        "geom": {"type": "LineString", "coordinates": [[85, 1], [85, 50]]},
    },
    {
        "name": "bordureRoute2",
        "geom": {"type": "LineString", "coordinates": [[92, 1], [92, 50]]},
    },
)


def sample_documents() -> List[dict[str, Any]]:
    """Return a fresh copy of the sample set.

    insert_many adds an _id to every document it receives, so callers never
    get the module-level dicts.
    """
    return copy.deepcopy(list(SAMPLE_DOCUMENTS))


def find_document(documents: Iterable[dict[str, Any]], name: str) -> dict[str, Any]:
    """Find the document with the given name."""
    for doc in documents:
        if doc.get("name") == name:
            return doc
    raise FeatureNotFoundError(name)


def validate_documents(documents: Iterable[dict[str, Any]]) -> List[dict[str, Any]]:
    """Validate geometries and name uniqueness, returning normalized documents."""
    validated = []
    seen_names = set()
    for doc in documents:
        try:
            feature = FeatureDocument.model_validate(doc)
        except ValidationError as e:
            raise InvalidFeatureError(f"Invalid feature document {doc.get('name')!r}: {e}") from e
        if feature.name in seen_names:
            raise InvalidFeatureError(f"Duplicate feature name: {feature.name}")
        seen_names.add(feature.name)
        validated.append(feature.to_mongo())
    return validated


def load_feature_collection(file_path: str | Path) -> List[dict[str, Any]]:
    """Read a GeoJSON FeatureCollection and convert it to feature documents.

    The document name comes from properties.name. Features without a name or
    a geometry are skipped.
    """
    path = Path(file_path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidFeatureError(f"Could not read GeoJSON from {path}: {e}") from e

    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise InvalidFeatureError(f"Expected a FeatureCollection in {path}")

    features = data.get("features")
    if not isinstance(features, list):
        raise InvalidFeatureError(f"Expected a list of features in {path}")

    documents = []
    for index, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise InvalidFeatureError(f"Feature #{index} in {path} is not an object")
        props = feature.get("properties") or {}
        if not isinstance(props, dict):
            raise InvalidFeatureError(f"Feature #{index} in {path} has non-object properties")
        name = props.get("name")
        geom = feature.get("geometry")
        if not name or not geom:
            logger.warning("Skipping feature without name or geometry: %s", feature.get("id"))
            continue
        documents.append({"name": str(name), "geom": geom})

    logger.info("Loaded %d features from %s", len(documents), path)
    return validate_documents(documents)
