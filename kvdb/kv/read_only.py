"""Read-only wrapper that rejects mutations."""

from ..errors import ReadOnlyViolation
from ..types import Batch, KeyList
from .base import Db


class ReadOnly(Db):
    """Passes reads through to ``db`` and raises on every write.

    Used by drivers when ``Config.read_only`` is set.
    """

    def __init__(self, db: Db) -> None:
        self.db = db

    def get(self, key: bytes) -> bytes | None:
        return self.db.get(key)

    def iter_keys(self, start_after: bytes | None = None) -> KeyList:
        return self.db.iter_keys(start_after)

    def put(self, key: bytes, value: bytes) -> bool:
        raise ReadOnlyViolation("put")

    def delete(self, key: bytes) -> bool:
        raise ReadOnlyViolation("delete")

    def clear(self) -> bool:
        raise ReadOnlyViolation("clear")

    def apply_batch(self, batch: Batch) -> bool:
        raise ReadOnlyViolation("apply_batch")

    def close(self) -> None:
        self.db.close()
