"""
Property Store Interface

The analysis components read listings through this interface and never
care whether they live in memory or in a database.
"""
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional

from src.cma.models.property_record import PropertyRecord


class PropertyStore(ABC):
    """
    Read-only view over a property inventory.

    Implementations must never yield a record whose visibility flag is off.
    """

    @abstractmethod
    def iter_visible(self) -> Iterator[PropertyRecord]:
        """Yield every visible listing in a stable order."""

    @abstractmethod
    def get_visible_by_ids(self, property_ids: Iterable[str]) -> List[PropertyRecord]:
        """
        Resolve ids to visible listings.

        Unknown or hidden ids are skipped. Duplicate ids resolve once.
        Results follow the order of first appearance in property_ids.
        """

    def get(self, property_id: str) -> Optional[PropertyRecord]:
        """Single visible listing or None."""
        found = self.get_visible_by_ids([property_id])
        return found[0] if found else None


def unique_ids(property_ids: Iterable[str]) -> List[str]:
    """De-duplicate ids keeping first-seen order."""
    seen = set()
    ordered = []
    for property_id in property_ids:
        key = str(property_id)
        if key in seen:
            continue
        seen.add(key)
        ordered.append(key)
    return ordered
