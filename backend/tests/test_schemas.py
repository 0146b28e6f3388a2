import pytest
from pydantic import ValidationError

from geoquery.schemas import FeatureDocument, LineStringGeometry, PointGeometry, PolygonGeometry


def test_geometry_union_is_discriminated_by_type():
    point = FeatureDocument.model_validate({"name": "p", "geom": {"type": "Point", "coordinates": [30, 30]}})
    line = FeatureDocument.model_validate(
        {"name": "l", "geom": {"type": "LineString", "coordinates": [[85, 1], [85, 50]]}}
    )
    polygon = FeatureDocument.model_validate(
        {"name": "b", "geom": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]}}
    )
    assert isinstance(point.geom, PointGeometry)
    assert isinstance(line.geom, LineStringGeometry)
    assert isinstance(polygon.geom, PolygonGeometry)


@pytest.mark.parametrize("geom", [
    {"type": "MultiPoint", "coordinates": [[0, 0]]},
    {"type": "Point", "coordinates": [0]},
    {"type": "LineString", "coordinates": [[0, 0]]},
    {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [0, 0]]]},
])
def test_invalid_geometries_are_rejected(geom):
    with pytest.raises(ValidationError):
        FeatureDocument.model_validate({"name": "x", "geom": geom})


def test_to_mongo_has_no_id():
    doc = FeatureDocument.model_validate({"name": "p", "geom": {"type": "Point", "coordinates": [1, 2]}})
    assert doc.to_mongo() == {"name": "p", "geom": {"type": "Point", "coordinates": [1, 2]}}
