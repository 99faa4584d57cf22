from __future__ import annotations

import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from threading import RLock
from typing import Any, Dict, List, Optional, Tuple

from ..schemas import RecordBody

RecordEntity = Dict[str, Any]

SORTABLE_FIELDS = frozenset({"id", "title", "description", "last_modified"})


@dataclass(frozen=True)
class ListQuery:
    """
    Query parameters for listing records of one collection.
    """
    sort: Tuple[str, ...] = ("-last_modified",)  # field names, '-' prefix for descending
    limit: Optional[int] = None
    offset: int = 0


def sort_records(records: List[RecordEntity], sort: Tuple[str, ...]) -> List[RecordEntity]:
    """
    Multi-key stable sort. Records lacking a field come last for that key in
    either direction. Raises ValueError for fields outside SORTABLE_FIELDS.
    """
    ordered = list(records)
    for raw in reversed(sort):
        descending = raw.startswith("-")
        field = raw[1:] if descending else raw
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"Unknown sort field '{field}'")
        present = [r for r in ordered if r.get(field) is not None]
        missing = [r for r in ordered if r.get(field) is None]
        present.sort(key=lambda r: r[field], reverse=descending)
        ordered = present + missing
    return ordered


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract record storage contract; collections are addressed by (bucket, collection)."""

    @abstractmethod
    def create(self, collection: Tuple[str, str], data: RecordBody) -> RecordEntity:
        """Create and return a new record."""

    @abstractmethod
    def get(self, collection: Tuple[str, str], record_id: str) -> Optional[RecordEntity]:
        """Return a record by id, or None if not found."""

    @abstractmethod
    def update(self, collection: Tuple[str, str], record_id: str, data: RecordBody) -> Optional[RecordEntity]:
        """Update provided fields of a record. Return the updated record or None if not found."""

    @abstractmethod
    def delete(self, collection: Tuple[str, str], record_id: str) -> Optional[RecordEntity]:
        """Delete a record. Return its tombstone, or None if not found."""

    @abstractmethod
    def list(self, collection: Tuple[str, str], query: Optional[ListQuery] = None) -> Tuple[List[RecordEntity], int]:
        """
        Return a slice of records and the total count of the collection.
        - Sorting on any of SORTABLE_FIELDS, several keys allowed
        - Pagination by limit/offset
        """


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and local development.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._collections: Dict[Tuple[str, str], Dict[str, RecordEntity]] = {}
        self._last_modified = 0

    def _timestamp(self) -> int:
        # Strictly increasing epoch milliseconds, even within the same millisecond.
        with self._lock:
            self._last_modified = max(int(time.time() * 1000), self._last_modified + 1)
            return self._last_modified

    def _items(self, collection: Tuple[str, str]) -> Dict[str, RecordEntity]:
        return self._collections.setdefault(collection, {})

    def create(self, collection: Tuple[str, str], data: RecordBody) -> RecordEntity:
        entity: RecordEntity = {"id": str(uuid.uuid4())}
        entity.update(data.model_dump(exclude_none=True))
        with self._lock:
            entity["last_modified"] = self._timestamp()
            self._items(collection)[entity["id"]] = entity
            return entity.copy()

    def get(self, collection: Tuple[str, str], record_id: str) -> Optional[RecordEntity]:
        with self._lock:
            item = self._items(collection).get(record_id)
            return None if item is None else item.copy()

    def update(self, collection: Tuple[str, str], record_id: str, data: RecordBody) -> Optional[RecordEntity]:
        with self._lock:
            existing = self._items(collection).get(record_id)
            if existing is None:
                return None

            updated = existing.copy()
            for name in data.model_fields_set:
                value = getattr(data, name)
                if value is None:
                    updated.pop(name, None)
                else:
                    updated[name] = value
            updated["last_modified"] = self._timestamp()

            self._items(collection)[record_id] = updated
            return updated.copy()

    def delete(self, collection: Tuple[str, str], record_id: str) -> Optional[RecordEntity]:
        with self._lock:
            removed = self._items(collection).pop(record_id, None)
            if removed is None:
                return None
            return {"id": record_id, "last_modified": self._timestamp(), "deleted": True}

    def list(self, collection: Tuple[str, str], query: Optional[ListQuery] = None) -> Tuple[List[RecordEntity], int]:
        q = query or ListQuery()
        with self._lock:
            items = list(self._items(collection).values())
            total = len(items)
            ordered = sort_records(items, q.sort)

            start = max(q.offset, 0)
            end = None if q.limit is None else start + max(q.limit, 0)
            return [r.copy() for r in ordered[start:end]], total


# PUBLIC_INTERFACE
def get_repository() -> Repository:
    """Return the process-wide repository used by the default app."""
    return _default_repository


_default_repository: Repository = InMemoryRepository()
