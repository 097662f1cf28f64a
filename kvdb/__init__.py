"""kvdb: Pluggable key-value storage with an HTTP integration tester."""

from .drivers import new_driver
from .errors import (
    BackendUnavailable,
    Corruption,
    DbError,
    InvalidArgument,
    NotFound,
    ReadOnlyViolation,
)
from .kv.base import Db, Driver
from .kv.memory import MemDb, MemDriver
from .types import (
    MAX_ITER_KEYS,
    Batch,
    Config,
    ConfigBuilder,
    KeyList,
    Mutation,
    MutationOp,
)

__all__ = [
    "MAX_ITER_KEYS",
    "BackendUnavailable",
    "Batch",
    "Config",
    "ConfigBuilder",
    "Corruption",
    "Db",
    "DbError",
    "Driver",
    "InvalidArgument",
    "KeyList",
    "MemDb",
    "MemDriver",
    "Mutation",
    "MutationOp",
    "NotFound",
    "ReadOnlyViolation",
    "new_driver",
]
