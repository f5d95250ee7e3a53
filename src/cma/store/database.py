"""
Database Property Store

Adapts PropertyRepository rows to the PropertyStore interface.
"""
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from src.cma.db.models import Property
from src.cma.db.repository import PropertyRepository
from src.cma.models.property_record import PropertyRecord
from src.cma.store.base import PropertyStore, unique_ids
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def row_to_record(row: Property) -> PropertyRecord:
    """Convert an ORM row into a validated PropertyRecord."""
    data = {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}
    return PropertyRecord.model_validate(data)


class SqlAlchemyPropertyStore(PropertyStore):
    """
    PropertyStore backed by a SQLAlchemy session.

    The session is owned by the caller; this class never commits.
    """

    def __init__(self, session: Session, repository: Optional[PropertyRepository] = None):
        self.session = session
        self.repository = repository or PropertyRepository()

    def iter_visible(self) -> Iterator[PropertyRecord]:
        for row in self.repository.get_visible(self.session):
            yield row_to_record(row)

    def get_visible_by_ids(self, property_ids: Iterable[str]) -> List[PropertyRecord]:
        ordered_ids = unique_ids(property_ids)
        rows = self.repository.get_visible_by_ids(self.session, ordered_ids)
        by_id = {row.id: row for row in rows}

        resolved = [row_to_record(by_id[pid]) for pid in ordered_ids if pid in by_id]
        logger.debug(
            "database_store_resolved_ids",
            requested=len(ordered_ids),
            resolved=len(resolved),
        )
        return resolved
