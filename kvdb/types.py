"""Value and request types: mutations, batches, key pages, config."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass, field

MAX_ITER_KEYS = 1000


def to_bytes(data: bytes | bytearray | memoryview, name: str = "key") -> bytes:
    """Return ``data`` as immutable bytes, rejecting non-byte input."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected bytes for {name}, got {type(data).__name__}")


class MutationOp(enum.Enum):
    INSERT = "insert"
    REMOVE = "remove"


@dataclass(frozen=True)
class Mutation:
    """A single write inside a ``Batch``.

    ``INSERT`` carries a value; ``REMOVE`` carries ``None``.
    """

    op: MutationOp
    key: bytes
    value: bytes | None = None

    def __post_init__(self) -> None:
        if self.op is MutationOp.INSERT and self.value is None:
            raise ValueError("INSERT mutation requires a value")
        if self.op is MutationOp.REMOVE and self.value is not None:
            raise ValueError("REMOVE mutation must not carry a value")


class Batch:
    """Ordered accumulator of mutations applied atomically by ``Db.apply_batch``.

    Order matters: later mutations on the same key win.
    """

    def __init__(self) -> None:
        self.ops: list[Mutation] = []

    def insert(self, key: bytes, value: bytes) -> Batch:
        self.ops.append(
            Mutation(MutationOp.INSERT, to_bytes(key), to_bytes(value, "value"))
        )
        return self

    def remove(self, key: bytes) -> Batch:
        self.ops.append(Mutation(MutationOp.REMOVE, to_bytes(key)))
        return self

    def effects(self) -> dict[bytes, bytes | None]:
        """Collapse the batch to its net effect per key.

        ``None`` marks a key whose last mutation is a removal.
        """
        result: dict[bytes, bytes | None] = {}
        for mutation in self.ops:
            result[mutation.key] = mutation.value
        return result

    def __iter__(self) -> Iterator[Mutation]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def __repr__(self) -> str:
        return f"Batch({self.ops!r})"


@dataclass
class KeyList:
    """One page of keys returned by ``Db.iter_keys``.

    Attributes:
        keys: Keys in backend enumeration order (not sorted).
        list_end: True when this page exhausts the key space.
    """

    keys: list[bytes] = field(default_factory=list)
    list_end: bool = True


@dataclass(frozen=True)
class Config:
    """Options for ``Driver.start_db``.

    Attributes:
        path: Backend-specific storage locator.
        read_only: Reject all mutations on the opened handle.
    """

    path: str = "./db"
    read_only: bool = False


class ConfigBuilder:
    """Fluent builder for ``Config``.

    Example::

        cfg = ConfigBuilder().path("/var/lib/kvdb").read_only(True).build()
    """

    def __init__(self) -> None:
        self._path: str | None = None
        self._read_only: bool | None = None

    def path(self, path: str) -> ConfigBuilder:
        self._path = path
        return self

    def read_only(self, read_only: bool) -> ConfigBuilder:
        self._read_only = read_only
        return self

    def build(self) -> Config:
        defaults = Config()
        return Config(
            path=self._path if self._path is not None else defaults.path,
            read_only=(
                self._read_only if self._read_only is not None else defaults.read_only
            ),
        )
