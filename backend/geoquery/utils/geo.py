"""Geometry helpers that MongoDB cannot provide (area calculation)."""
from typing import Any, Callable, Mapping

from pyproj import Geod
from shapely.geometry import Polygon, shape
from shapely.geometry.polygon import orient

# Coordinates are [lon, lat] on the WGS84 ellipsoid
WGS84_GEOD = Geod(ellps="WGS84")

AreaFunction = Callable[[Mapping[str, Any]], float]


def polygon_area(polygon: Polygon) -> float:
    """Geodesic area of a shapely Polygon in square meters, holes subtracted."""
    # Counter-clockwise exterior and clockwise holes give a positive total
    area, _perimeter = WGS84_GEOD.geometry_area_perimeter(orient(polygon, sign=1.0))
    return abs(area)


def geometry_area(geom: Mapping[str, Any]) -> float:
    """Geodesic area of a GeoJSON geometry in square meters.

    Points and lines have no area and return 0.
    """
    geometry = shape(geom)
    if geometry.geom_type == "Polygon":
        return polygon_area(geometry)
    if geometry.geom_type == "MultiPolygon":
        return sum(polygon_area(part) for part in geometry.geoms)
    return 0.0
