import copy
import io
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import BulkWriteError, OperationFailure
from shapely.geometry import shape

from geoquery.config import Settings
from geoquery.reporter import ConsoleReporter


def _matches(doc, flt):
    """Evaluate the subset of MongoDB filters the queries use.

    Spatial operators are approximated with planar shapely predicates; the
    real spherical behavior is covered by the live MongoDB test.
    """
    for key, cond in flt.items():
        if key == "geom.type":
            if doc["geom"]["type"] != cond:
                return False
        elif key == "name" and isinstance(cond, dict):
            if doc["name"] == cond["$ne"]:
                return False
        elif key == "name":
            if doc["name"] != cond:
                return False
        elif key == "geom" and "$geoWithin" in cond:
            container = shape(cond["$geoWithin"]["$geometry"])
            if not shape(doc["geom"]).within(container):
                return False
        elif key == "geom" and "$near" in cond:
            continue
        else:
            raise AssertionError(f"unsupported filter key: {key}")
    return True


def _near_geometry(flt):
    cond = flt.get("geom")
    if isinstance(cond, dict) and "$near" in cond:
        return shape(cond["$near"]["$geometry"])
    return None


class _FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    """In-memory stand-in for AsyncCollection."""

    def __init__(self, name="test"):
        self.name = name
        self.docs = []
        self.indexes = []
        self.calls = []
        self.fail_on = {}

    def _maybe_fail(self, op):
        self.calls.append(op)
        if op in self.fail_on:
            raise self.fail_on[op]

    def _unique_fields(self):
        return [keys[0][0] for keys, options in self.indexes if options.get("unique")]

    async def delete_many(self, flt):
        self._maybe_fail("delete_many")
        removed = [d for d in self.docs if _matches(d, flt)]
        self.docs = [d for d in self.docs if d not in removed]
        return SimpleNamespace(deleted_count=len(removed))

    async def create_index(self, keys, **options):
        self._maybe_fail("create_index")
        if (keys, options) not in self.indexes:
            self.indexes.append((keys, options))
        return "_".join(f"{field}_{kind}" for field, kind in keys)

    async def insert_many(self, documents):
        self._maybe_fail("insert_many")
        ids = []
        for doc in documents:
            for field in self._unique_fields():
                if any(d[field] == doc[field] for d in self.docs):
                    raise BulkWriteError({
                        "writeErrors": [{"code": 11000, "errmsg": f"E11000 duplicate key: {doc[field]}"}],
                        "nInserted": len(ids),
                    })
            doc.setdefault("_id", ObjectId())
            self.docs.append(copy.deepcopy(doc))
            ids.append(doc["_id"])
        return SimpleNamespace(inserted_ids=ids)

    def _query(self, flt):
        docs = [copy.deepcopy(d) for d in self.docs if _matches(d, flt)]
        origin = _near_geometry(flt)
        if origin is not None:
            docs.sort(key=lambda d: shape(d["geom"]).distance(origin))
        return docs

    def find(self, flt):
        self._maybe_fail("find")
        return _FakeCursor(self._query(flt))

    async def find_one(self, flt):
        self._maybe_fail("find_one")
        docs = self._query(flt)
        return docs[0] if docs else None

    async def count_documents(self, flt):
        return len(self._query(flt))


class FakeConnection:
    def __init__(self, uri="mongodb://fake:27017/geo"):
        self.uri = uri
        self.collections = {}
        self.close_calls = 0
        self.close_error = None

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection(name))

    async def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return ConsoleReporter(stream=output)


@pytest.fixture
def settings():
    return Settings(
        MONGODB_URI="mongodb://fake:27017/geo",
        MONGODB_COLLECTION="test",
        MONGODB_SERVER_SELECTION_TIMEOUT_MS=500,
    )


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def connector(fake_connection):
    calls = []

    async def _connect(uri, timeout_ms=None):
        calls.append((uri, timeout_ms))
        return fake_connection

    _connect.calls = calls
    return _connect


@pytest.fixture
def index_failure():
    return OperationFailure("index build failed", code=85)
