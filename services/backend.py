"""
Client for the record store and authentication backend.

Every page talks to storage through this small contract:

    backend.db.<table>.list(where=..., order_by=..., limit=...)
    backend.db.<table>.create(record)
    backend.db.<table>.update(record_id, patch)
    backend.db.<table>.delete(record_id)
    backend.auth.me() / login() / logout() / on_auth_state_changed(callback)

The tables are backed by the JSON files in `services.persistence`. Any storage
problem is raised as a `BackendError` so views can catch a single type.
"""
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from . import persistence


class BackendError(Exception):
    """A backend call failed."""


class RecordNotFound(BackendError):
    pass


class DuplicateRecord(BackendError):
    pass


class NotAuthenticated(BackendError):
    pass


def _sort_key(value: Any):
    # missing values sort as the smallest
    return (value is not None, value)


class Table:
    """One record collection (rows are plain dicts keyed by ``id``)."""

    def __init__(self, name: str):
        self.name = name

    def _load(self) -> List[Dict[str, Any]]:
        try:
            return persistence.load_list(self.name)
        except (OSError, KeyError) as e:
            raise BackendError(f"Could not load {self.name}: {e}") from e

    def _save(self, rows: List[Dict[str, Any]]):
        try:
            persistence.replace_all(self.name, rows)
        except (OSError, TypeError, ValueError) as e:
            raise BackendError(f"Could not save {self.name}: {e}") from e

    def list(self, where: Optional[Mapping[str, Any]] = None,
             order_by: Optional[Mapping[str, str]] = None,
             limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return matching rows.

        where: field -> value equality filter.
        order_by: field -> 'asc' | 'desc', first entry is the primary key.
        limit: maximum number of rows, applied after sorting.
        """
        rows = self._load()
        if where:
            rows = [r for r in rows if all(r.get(k) == v for k, v in where.items())]
        if order_by:
            # stable sorts from the least to the most significant key
            for key, direction in reversed(list(order_by.items())):
                if direction not in ('asc', 'desc'):
                    raise ValueError(f"order_by direction must be 'asc' or 'desc', got {direction!r}")
                rows.sort(key=lambda r: _sort_key(r.get(key)), reverse=direction == 'desc')
        if limit is not None:
            rows = rows[:max(limit, 0)]
        return rows

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        return next((r for r in self._load() if r.get('id') == record_id), None)

    def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if not record.get('id'):
            raise BackendError(f"{self.name}: record has no id")
        rows = self._load()
        if any(r.get('id') == record['id'] for r in rows):
            raise DuplicateRecord(f"{self.name}: id {record['id']} already exists")
        row = dict(record)
        rows.append(row)
        self._save(rows)
        logger.debug("{}: created {}", self.name, row['id'])
        return dict(row)

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Dict[str, Any]:
        rows = self._load()
        row = next((r for r in rows if r.get('id') == record_id), None)
        if row is None:
            raise RecordNotFound(f"{self.name}: no record {record_id}")
        row.update({k: v for k, v in patch.items() if k != 'id'})
        self._save(rows)
        logger.debug("{}: updated {}", self.name, record_id)
        return dict(row)

    def delete(self, record_id: str):
        rows = self._load()
        remaining = [r for r in rows if r.get('id') != record_id]
        if len(remaining) == len(rows):
            raise RecordNotFound(f"{self.name}: no record {record_id}")
        self._save(remaining)
        logger.debug("{}: deleted {}", self.name, record_id)


class Database:
    """Attribute access to tables: ``db.experiments``, ``db.card_notes``..."""

    def __init__(self):
        self._tables = {name: Table(name) for name in persistence.TABLES}

    def __getattr__(self, name: str) -> Table:
        tables = self.__dict__.get('_tables', {})
        if name in tables:
            return tables[name]
        raise AttributeError(f"No table named {name!r}")


class Backend:
    def __init__(self):
        # late import: auth builds on Table
        from .auth import Auth
        self.db = Database()
        self.auth = Auth(self.db.users)
