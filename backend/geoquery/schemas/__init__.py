"""Schema exports."""
from geoquery.schemas.feature import (
    FeatureDocument,
    Geometry,
    LineStringGeometry,
    PointGeometry,
    PolygonGeometry,
)

__all__ = [
    "FeatureDocument",
    "Geometry",
    "LineStringGeometry",
    "PointGeometry",
    "PolygonGeometry",
]
