"""Exceptions raised by the geospatial demo pipeline."""


class GeoQueryError(Exception):
    """Base error for every failure the pipeline reports."""


class DatabaseConnectionError(GeoQueryError):
    """The MongoDB server could not be reached."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Could not connect to MongoDB at {uri}: {reason}")


class SeedError(GeoQueryError):
    """Clearing or inserting the sample data failed."""


class QueryError(GeoQueryError):
    """A read query against the collection failed."""


class FeatureNotFoundError(GeoQueryError):
    """A reference document name is not part of the data set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No document named {name!r} in the data set")


class InvalidFeatureError(GeoQueryError):
    """A feature document or feature file does not have the expected shape."""
