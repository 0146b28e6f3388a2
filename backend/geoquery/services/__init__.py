"""Services exports."""
from geoquery.services.queries import (
    AreaResult,
    find_areas,
    find_closest_object,
    find_objects_within,
)
from geoquery.services.seeder import clear_data, ensure_indexes, insert_sample_data, seed

__all__ = [
    "AreaResult",
    "clear_data",
    "ensure_indexes",
    "find_areas",
    "find_closest_object",
    "find_objects_within",
    "insert_sample_data",
    "seed",
]
