"""Abstract storage and driver interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..types import MAX_ITER_KEYS, Batch, Config, KeyList


class Db(ABC):
    """Handle to an opened database operating on bytes only.

    A handle is owned by one caller at a time. It may be moved to
    another thread but the baseline contract is single-owner use.
    Handles are context managers; leaving the block closes them.
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def put(self, key: bytes, value: bytes) -> bool:
        """Create or replace the binding for key. Returns True."""

    @abstractmethod
    def delete(self, key: bytes) -> bool:
        """Remove key. Returns True iff a binding existed."""

    @abstractmethod
    def clear(self) -> bool:
        """Remove all bindings. Returns True."""

    @abstractmethod
    def apply_batch(self, batch: Batch) -> bool:
        """Apply every mutation in ``batch`` atomically, in order.

        On success all mutations are visible. If an error is raised
        the visible state is unchanged from before the call.
        """

    @abstractmethod
    def iter_keys(self, start_after: bytes | None = None) -> KeyList:
        """Return one page of at most ``MAX_ITER_KEYS`` keys.

        Pass the last key of the previous page as ``start_after`` to
        resume. Pages are in backend order, not sorted.
        """

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self) -> Db:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Driver(ABC):
    """Stateless factory that opens ``Db`` handles."""

    @abstractmethod
    def start_db(self, config: Config) -> Db:
        """Open or create the database described by ``config``."""


def page_keys(keys: Iterable[bytes], start_after: bytes | None = None) -> KeyList:
    """Cut one page out of a backend's key enumeration.

    Keys up to and including ``start_after`` are skipped. If the cursor
    is no longer present the page is empty and marked as the end.
    """
    page = KeyList(list_end=True)
    capture = start_after is None
    for key in keys:
        if not capture:
            # The cursor itself was returned on the previous page.
            capture = key == start_after
            continue
        if len(page.keys) >= MAX_ITER_KEYS:
            page.list_end = False
            break
        page.keys.append(key)
    return page
