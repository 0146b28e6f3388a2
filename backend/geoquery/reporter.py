"""Console reporting for each pipeline step."""
import logging
import sys
from typing import Any, Mapping, Optional, Sequence, TextIO

from bson import json_util

logger = logging.getLogger("geoquery.reporter")


def to_json(doc: Optional[Mapping[str, Any]]) -> str:
    """Serialize a MongoDB document (ObjectId included) to one line of JSON."""
    return json_util.dumps(doc)


class ConsoleReporter:
    """Prints human readable progress lines.

    Informational output goes to ``stream`` (stdout by default). The final
    failure, if any, is emitted as a logging warning.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected stdout is honored
        return self._stream or sys.stdout

    def line(self, text: str = "") -> None:
        print(text, file=self.stream)

    # --- Connector ---
    def connected(self, uri: str) -> None:
        self.line()
        self.line(f"Connected to MongoDB at {uri}")
        self.line()

    # --- Seeder ---
    def clearing(self, collection: str) -> None:
        self.line(f'Removing all documents in collection "{collection}"')

    def ensuring_index(self, description: str, field: str, collection: str) -> None:
        self.line(f'Ensuring {description} index on "{field}" property of collection "{collection}"')

    def inserting(self, collection: str, documents: Sequence[Mapping[str, Any]]) -> None:
        self.line()
        self.line(f'Inserting {len(documents)} sample geospatial documents in collection "{collection}":')
        for doc in documents:
            self.line(f"- {to_json(doc)}")

    # --- Query runner ---
    def areas_header(self) -> None:
        self.line()
        self.line("Find all polygons and calculating their areas:")

    def area(self, name: str, area: float) -> None:
        self.line(f"- area of {name} = {area} sq. m.")

    def closest_header(self, name: str) -> None:
        self.line()
        self.line(f"Find closest object to {name}:")

    def closest(self, doc: Optional[Mapping[str, Any]]) -> None:
        self.line(f"- {to_json(doc)}")

    def within_header(self, name: str) -> None:
        self.line()
        self.line(f"Find objects within {name}:")

    def within(self, docs: Sequence[Mapping[str, Any]]) -> None:
        for doc in docs:
            self.line(f"- {to_json(doc)}")

    # --- Cleanup ---
    def finished(self, error: Optional[BaseException] = None) -> None:
        if error is not None:
            logger.warning("%s", error)
        else:
            self.line()
