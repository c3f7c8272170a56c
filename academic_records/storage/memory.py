import threading
from typing import Any, Dict, List, Mapping, Optional

from ..app_logger import get_logger
from ..models.core import ALL_TABLES
from .base import Storage
from .exceptions import MissingReferenceError
from .tables import Table


logger = get_logger("storage.memory")


class MemStorage(Storage):
    """Volatile in-memory backend.

    All nine tables share one re-entrant lock, so every single-table operation
    and every insert/update together with its foreign-key check is atomic when
    request handlers run on worker threads. Sequences of calls are not.
    """

    def __init__(self, seed: bool = False):
        self._lock = threading.RLock()
        self._tables: Dict[str, Table] = {
            spec.name: Table(spec, lock=self._lock) for spec in ALL_TABLES
        }
        if seed:
            from ..seed import seed_demo_data

            seed_demo_data(self)

    def table(self, name: str) -> Table:
        return self._tables[name]

    def _check_references(self, table: Table, data: Mapping[str, Any], partial: bool) -> None:
        for column, target in table.spec.foreign_keys.items():
            if partial and column not in data:
                continue
            value = data.get(column)
            if value is None or value not in self._tables[target]:
                logger.warning("Rejected %s.%s=%r: no such %s row", table.name, column, value, target)
                raise MissingReferenceError(table.name, column, value)

    def _get(self, table: str, row_id: int) -> Optional[dict]:
        return self._tables[table].get(row_id)

    def _all(self, table: str) -> List[dict]:
        return self._tables[table].all()

    def _insert(self, table: str, data: Mapping[str, Any]) -> dict:
        target = self._tables[table]
        with self._lock:
            self._check_references(target, data, partial=False)
            return target.insert(dict(data))

    def _update(self, table: str, row_id: int, partial: Mapping[str, Any]) -> Optional[dict]:
        target = self._tables[table]
        with self._lock:
            if row_id not in target:
                return None
            self._check_references(target, partial, partial=True)
            return target.update(row_id, dict(partial))

    def _delete(self, table: str, row_id: int) -> bool:
        return self._tables[table].delete(row_id)

    def _find_one(self, table: str, column: str, value: Any) -> Optional[dict]:
        return self._tables[table].find_one(column, value)

    def _find_all(self, table: str, column: str, value: Any) -> List[dict]:
        return self._tables[table].find_all(column, value)
