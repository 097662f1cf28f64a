"""Storage backends.

The disk backend lives in ``kvdb.kv.disk`` and is imported on demand so
that ``diskcache`` only loads when it is used.
"""

from .base import Db, Driver, page_keys
from .memory import MemDb, MemDriver
from .read_only import ReadOnly

__all__ = [
    "Db",
    "Driver",
    "MemDb",
    "MemDriver",
    "ReadOnly",
    "page_keys",
]
