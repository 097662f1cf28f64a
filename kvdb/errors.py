"""kvdb error types."""


class DbError(Exception):
    """Base class for errors surfaced by a ``Db`` handle or ``Driver``."""


class NotFound(DbError):
    """Raised by adapter layers when a key has no binding.

    ``Db.get`` reports absence with ``None`` instead.
    """


class ReadOnlyViolation(DbError):
    """Raised when a mutation is attempted on a read-only handle.

    Attributes:
        operation: Name of the rejected operation.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: database is read-only")


class BackendUnavailable(DbError):
    """Raised when a backend cannot be opened or reached.

    Also raised for operations on a handle that was already closed.
    """


class Corruption(DbError):
    """Raised when persisted state fails integrity checks."""


class InvalidArgument(DbError):
    """Reserved. The current surface accepts all byte inputs."""
