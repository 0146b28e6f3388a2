"""Pydantic schemas for GeoJSON feature documents."""
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, Field, field_validator

# Integers stay integers so documents are stored as written
Position = Annotated[List[Union[int, float]], Field(min_length=2, max_length=3)]


# --- Geometry Schemas ---
class PointGeometry(BaseModel):
    """GeoJSON Point: a single [lon, lat] position."""
    type: Literal["Point"] = "Point"
    coordinates: Position


class LineStringGeometry(BaseModel):
    """GeoJSON LineString: two or more positions."""
    type: Literal["LineString"] = "LineString"
    coordinates: Annotated[List[Position], Field(min_length=2)]


class PolygonGeometry(BaseModel):
    """GeoJSON Polygon: exterior ring followed by optional holes."""
    type: Literal["Polygon"] = "Polygon"
    coordinates: Annotated[List[List[Position]], Field(min_length=1)]

    @field_validator("coordinates")
    @classmethod
    def rings_must_be_closed(cls, rings: List[List[List[Union[int, float]]]]) -> List[List[List[Union[int, float]]]]:
        for ring in rings:
            if len(ring) < 4:
                raise ValueError("a linear ring needs at least 4 positions")
            if ring[0] != ring[-1]:
                raise ValueError("a linear ring must start and end with the same position")
        return rings


Geometry = Annotated[
    Union[PointGeometry, LineStringGeometry, PolygonGeometry],
    Field(discriminator="type"),
]


# --- Document Schemas ---
class FeatureDocument(BaseModel):
    """Document stored in the collection: a unique name and its geometry."""
    name: str = Field(min_length=1)
    geom: Geometry

    def to_mongo(self) -> dict[str, Any]:
        """Plain dict ready for insert_many (no _id, insertion adds it)."""
        return self.model_dump()
