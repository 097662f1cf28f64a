"""Durable backend using diskcache (SQLite + files)."""

from __future__ import annotations

import contextlib
import logging
import os
import sqlite3
from typing import Iterator, cast

from diskcache import Cache as DiskCache
from diskcache import Timeout
from diskcache.core import DBNAME

from ..errors import BackendUnavailable, Corruption
from ..types import Batch, Config, KeyList, Mutation, MutationOp, to_bytes
from .base import Db, Driver, page_keys
from .read_only import ReadOnly

logger = logging.getLogger(__name__)

_MISSING = object()

# Values at or above diskcache's min file size live in separate files that
# are unlinked before the enclosing transaction commits. Keep every value
# inside SQLite so a rolled-back batch restores it.
_INLINE_LIMIT = 2**62


@contextlib.contextmanager
def _translate_errors(directory: str) -> Iterator[None]:
    """Map storage-library failures onto the kvdb error kinds."""
    try:
        yield
    except Timeout as error:
        raise BackendUnavailable(f"database at {directory!r} is locked") from error
    except sqlite3.OperationalError as error:
        raise BackendUnavailable(f"database at {directory!r}: {error}") from error
    except sqlite3.DatabaseError as error:
        raise Corruption(f"database at {directory!r}: {error}") from error


class DiskDb(Db):
    """Database stored in a diskcache directory.

    Eviction is disabled so nothing is ever culled. All values are stored
    inline in SQLite, and batches run inside a single transaction that
    rolls back on any error.
    """

    def __init__(self, directory: str) -> None:
        self.directory = directory
        with _translate_errors(directory):
            try:
                self.store = DiskCache(
                    directory,
                    eviction_policy="none",
                    disk_min_file_size=_INLINE_LIMIT,
                )
            except OSError as error:
                raise BackendUnavailable(
                    f"cannot open database at {directory!r}: {error}"
                ) from error
        self._closed = False
        logger.debug("Opened disk database at %s", directory)

    def _guard(self):
        if self._closed:
            raise BackendUnavailable(f"database at {self.directory!r} is closed")
        return _translate_errors(self.directory)

    def get(self, key: bytes) -> bytes | None:
        key = to_bytes(key)
        with self._guard():
            value = self.store.get(key, default=_MISSING, retry=True)
        if value is _MISSING:
            return None
        return cast(bytes, value)

    def put(self, key: bytes, value: bytes) -> bool:
        key, value = to_bytes(key), to_bytes(value, "value")
        with self._guard():
            self.store.set(key, value, retry=True)
        return True

    def delete(self, key: bytes) -> bool:
        key = to_bytes(key)
        with self._guard():
            return bool(self.store.delete(key, retry=True))

    def clear(self) -> bool:
        with self._guard():
            self.store.clear(retry=True)
        return True

    def _apply(self, mutation: Mutation) -> None:
        if mutation.op is MutationOp.INSERT:
            self.store.set(mutation.key, mutation.value)
        else:
            self.store.delete(mutation.key)

    def apply_batch(self, batch: Batch) -> bool:
        with self._guard():
            try:
                with self.store.transact(retry=True):
                    for mutation in batch:
                        self._apply(mutation)
            except Exception:
                logger.warning(
                    "Rolled back batch of %d mutations on %s", len(batch), self.directory
                )
                raise
        return True

    def iter_keys(self, start_after: bytes | None = None) -> KeyList:
        if start_after is not None:
            start_after = to_bytes(start_after)
        with self._guard():
            return page_keys(self.store.iterkeys(), start_after)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.store.close()
        logger.debug("Closed disk database at %s", self.directory)


class DiskDriver(Driver):
    """Opens ``DiskDb`` handles rooted at ``config.path``.

    The directory is created when missing, except for read-only opens,
    which require an existing database file.
    """

    def start_db(self, config: Config) -> Db:
        if config.read_only:
            if not os.path.isfile(os.path.join(config.path, DBNAME)):
                raise BackendUnavailable(f"no database at {config.path!r}")
            return ReadOnly(DiskDb(config.path))
        return DiskDb(config.path)
