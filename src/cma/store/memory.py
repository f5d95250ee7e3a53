"""
In-Memory Property Store

Dictionary-backed store for tests, notebooks and embedding the engine
without a database. Change listeners let callers invalidate caches
explicitly when a listing is written.
"""
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from src.cma.models.property_record import PropertyRecord
from src.cma.store.base import PropertyStore, unique_ids
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)

ChangeListener = Callable[[List[str]], None]


class InMemoryPropertyStore(PropertyStore):
    """Property store keyed by record id, preserving insertion order."""

    def __init__(self, records: Optional[Iterable[PropertyRecord]] = None):
        self._records: Dict[str, PropertyRecord] = {}
        self._listeners: List[ChangeListener] = []
        if records:
            for record in records:
                self._records[record.id] = record
        logger.debug("memory_store_initialized", count=len(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback receiving the ids touched by each write."""
        self._listeners.append(listener)

    def _notify(self, property_ids: List[str]) -> None:
        for listener in self._listeners:
            listener(property_ids)

    def upsert(self, record: PropertyRecord) -> PropertyRecord:
        self._records[record.id] = record
        self._notify([record.id])
        return record

    def upsert_many(self, records: Iterable[PropertyRecord]) -> int:
        touched = []
        for record in records:
            self._records[record.id] = record
            touched.append(record.id)
        if touched:
            self._notify(touched)
        return len(touched)

    def remove(self, property_id: str) -> bool:
        if self._records.pop(property_id, None) is None:
            return False
        self._notify([property_id])
        return True

    def iter_visible(self) -> Iterator[PropertyRecord]:
        return (record for record in self._records.values() if record.is_visible)

    def get_visible_by_ids(self, property_ids: Iterable[str]) -> List[PropertyRecord]:
        resolved = []
        for property_id in unique_ids(property_ids):
            record = self._records.get(property_id)
            if record is not None and record.is_visible:
                resolved.append(record)
        return resolved
