"""Shared fixtures: temp directories, opened databases, REST adapter."""

import shutil
import tempfile
from urllib.parse import unquote

import httpx
import pytest

from kvdb import ConfigBuilder, Db, NotFound, new_driver
from kvdb.kv.memory import MemDriver


@pytest.fixture
def tmpdir_path():
    tmpdir = tempfile.mkdtemp()
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(params=["memory", "disk"])
def db(request, tmpdir_path):
    """An empty, writable handle from each bundled driver."""
    config = ConfigBuilder().path(tmpdir_path).read_only(False).build()
    handle = new_driver(request.param).start_db(config)
    yield handle
    handle.close()


def _lookup(db: Db, key: bytes) -> bytes:
    value = db.get(key)
    if value is None:
        raise NotFound(key.decode("utf-8"))
    return value


class RestAdapter:
    """In-process stand-in for the REST server, backed by memory handles.

    Handles ``{METHOD} /api/{db_id}/{key}`` and opens one ``MemDb`` per
    ``db_id`` on first use.
    """

    def __init__(self) -> None:
        self.driver = MemDriver()
        self.dbs: dict[str, Db] = {}

    def _db(self, db_id: str) -> Db:
        if db_id not in self.dbs:
            self.dbs[db_id] = self.driver.start_db(ConfigBuilder().build())
        return self.dbs[db_id]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = request.url.raw_path.decode("ascii").split("?")[0].split("/")
        if len(parts) != 4 or parts[1] != "api":
            return httpx.Response(404, text="Route Not Found")
        db = self._db(unquote(parts[2]))
        key = unquote(parts[3]).encode("utf-8")

        try:
            if request.method == "GET":
                return httpx.Response(200, content=_lookup(db, key))
            if request.method == "PUT":
                db.put(key, request.content)
                return httpx.Response(200)
            if request.method == "DELETE":
                if not db.delete(key):
                    raise NotFound(key.decode("utf-8"))
                return httpx.Response(200)
        except NotFound:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(405, text="Method Not Allowed")


@pytest.fixture
def rest_adapter():
    return RestAdapter()
