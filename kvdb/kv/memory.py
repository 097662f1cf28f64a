"""In-memory reference backend."""

import threading

from ..types import Batch, Config, KeyList, to_bytes
from .base import Db, Driver, page_keys
from .read_only import ReadOnly


class MemDb(Db):
    """A memory-backed database.

    Keys are enumerated in dict order. All operations are protected by
    a single lock, so a handle may also be shared between threads.
    """

    def __init__(self) -> None:
        self.memory: dict[bytes, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: bytes) -> bytes | None:
        key = to_bytes(key)
        with self._lock:
            return self.memory.get(key)

    def put(self, key: bytes, value: bytes) -> bool:
        key, value = to_bytes(key), to_bytes(value, "value")
        with self._lock:
            self.memory[key] = value
        return True

    def delete(self, key: bytes) -> bool:
        key = to_bytes(key)
        with self._lock:
            return self.memory.pop(key, None) is not None

    def clear(self) -> bool:
        with self._lock:
            self.memory.clear()
        return True

    def apply_batch(self, batch: Batch) -> bool:
        # Batch entries are already validated bytes; nothing below raises.
        effects = batch.effects()
        with self._lock:
            for key, value in effects.items():
                if value is None:
                    self.memory.pop(key, None)
                else:
                    self.memory[key] = value
        return True

    def iter_keys(self, start_after: bytes | None = None) -> KeyList:
        if start_after is not None:
            start_after = to_bytes(start_after)
        with self._lock:
            keys = list(self.memory)
        return page_keys(keys, start_after)


class MemDriver(Driver):
    """Opens a fresh, empty ``MemDb`` per call. ``config.path`` is ignored."""

    def start_db(self, config: Config) -> Db:
        db = MemDb()
        if config.read_only:
            return ReadOnly(db)
        return db
