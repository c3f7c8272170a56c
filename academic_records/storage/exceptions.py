from typing import Any


class StorageError(Exception):
    """Base class for constraint violations raised by a storage backend."""


class ConflictError(StorageError):
    """A unique key is already taken by another row."""

    def __init__(self, table: str, field: str, value: Any):
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"{table}.{field} '{value}' already exists")


class MissingReferenceError(StorageError):
    """A foreign key on insert/update points at a row that does not exist."""

    def __init__(self, table: str, field: str, value: Any):
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"{table}.{field} references missing row {value}")


class DanglingReferenceError(StorageError):
    """Raised by strict joins when a stored foreign key no longer resolves."""

    def __init__(self, table: str, field: str, value: Any):
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"{table}.{field} -> {value} does not resolve")
