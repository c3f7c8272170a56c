import itertools
import threading
from typing import Any, Dict, Iterator, List, Optional

from ..app_logger import get_logger
from ..models.core import TableSpec
from .exceptions import ConflictError


logger = get_logger("storage.tables")


class Table:
    """One in-memory entity table.

    Rows are plain dicts keyed by an integer id taken from a per-table counter
    that starts at 1 and is never reused, even after deletes. Every column named
    in ``spec.unique`` has a hash index kept in step with insert/update/delete,
    so unique lookups and conflict checks do not scan the table.
    """

    def __init__(self, spec: TableSpec, lock: Optional[threading.RLock] = None):
        self.spec = spec
        self.name = spec.name
        self._lock = lock or threading.RLock()
        self._rows: Dict[int, dict] = {}
        self._ids = itertools.count(1)
        self._indexes: Dict[str, Dict[Any, int]] = {col: {} for col in spec.unique}

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def _key(self, column: str, value: Any) -> Any:
        if column in self.spec.case_insensitive and isinstance(value, str):
            return value.lower()
        return value

    def _check_unique(self, data: dict, row_id: Optional[int] = None) -> None:
        for column, index in self._indexes.items():
            if column not in data or data[column] is None:
                continue
            owner = index.get(self._key(column, data[column]))
            if owner is not None and owner != row_id:
                logger.warning("Conflict on %s.%s=%r", self.name, column, data[column])
                raise ConflictError(self.name, column, data[column])

    def _index(self, row: dict) -> None:
        for column, index in self._indexes.items():
            if row.get(column) is not None:
                index[self._key(column, row[column])] = row["id"]

    def _unindex(self, row: dict) -> None:
        for column, index in self._indexes.items():
            if row.get(column) is not None:
                index.pop(self._key(column, row[column]), None)

    def insert(self, data: dict) -> dict:
        with self._lock:
            self._check_unique(data)
            row = {key: value for key, value in data.items() if key != "id"}
            row["id"] = next(self._ids)
            self._rows[row["id"]] = row
            self._index(row)
            logger.debug("Inserted %s id=%s", self.name, row["id"])
            return dict(row)

    def get(self, row_id: int) -> Optional[dict]:
        with self._lock:
            row = self._rows.get(row_id)
            return dict(row) if row is not None else None

    def update(self, row_id: int, partial: dict) -> Optional[dict]:
        """Merge ``partial`` into the stored row; only supplied keys change."""
        with self._lock:
            current = self._rows.get(row_id)
            if current is None:
                return None
            changes = {key: value for key, value in partial.items() if key != "id"}
            self._check_unique(changes, row_id=row_id)
            self._unindex(current)
            current.update(changes)
            self._index(current)
            return dict(current)

    def delete(self, row_id: int) -> bool:
        with self._lock:
            row = self._rows.pop(row_id, None)
            if row is None:
                return False
            self._unindex(row)
            logger.debug("Deleted %s id=%s", self.name, row_id)
            return True

    def all(self) -> List[dict]:
        with self._lock:
            return [dict(row) for row in self._rows.values()]

    def __iter__(self) -> Iterator[dict]:
        return iter(self.all())

    def find_one(self, column: str, value: Any) -> Optional[dict]:
        """First row whose ``column`` equals ``value`` (indexed when unique)."""
        with self._lock:
            if column in self._indexes:
                row_id = self._indexes[column].get(self._key(column, value))
                return self.get(row_id) if row_id is not None else None
            key = self._key(column, value)
            for row in self._rows.values():
                if self._key(column, row.get(column)) == key:
                    return dict(row)
            return None

    def find_all(self, column: str, value: Any) -> List[dict]:
        with self._lock:
            return [dict(row) for row in self._rows.values() if row.get(column) == value]
