"""Driver factory function."""

from typing import Literal

from .kv.base import Driver


def new_driver(kind: Literal["memory", "disk"] = "memory") -> Driver:
    """Create a driver for the given backend.

    Args:
        kind: ``"memory"`` (default) for the in-memory reference
            backend, or ``"disk"`` for the durable diskcache backend.

    Returns:
        A ``Driver`` whose ``start_db`` opens handles of that kind.
    """
    if kind == "memory":
        from .kv.memory import MemDriver

        return MemDriver()
    if kind == "disk":
        from .kv.disk import DiskDriver

        return DiskDriver()
    raise ValueError(f"Unknown driver: {kind!r}")
