"""
Repository Pattern for Data Access

Listing and seller-update persistence. Routers, scripts and stores go through
these classes rather than issuing queries of their own.
"""
from datetime import datetime
from typing import List, Optional, Dict, Any, Iterable, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from src.cma.db.models import Property, SellerUpdate
from src.cma.models.property_record import PropertyRecord
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class BaseRepository:
    """
    Primary-key CRUD shared by the listing and watch repositories.

    Every write flushes but never commits; the caller owns the transaction.
    """

    def __init__(self, model: Type[T]):
        self.model = model

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def get_by_id(self, session: Session, id_value: Any) -> Optional[T]:
        return session.get(self.model, id_value)

    def create(self, session: Session, **kwargs) -> T:
        """
        Add a new row.

        Args:
            session: Database session
            **kwargs: Column values

        Returns:
            Flushed model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        session.flush()
        logger.debug("row_created", model=self.model_name, id=instance.id)
        return instance

    def update(self, session: Session, id_value: Any, **kwargs) -> Optional[T]:
        """
        Set columns on an existing row.

        Returns:
            Updated instance, or None when no row has that id
        """
        instance = self.get_by_id(session, id_value)
        if instance is None:
            logger.warning("row_update_missing", model=self.model_name, id=id_value)
            return None

        self._assign(instance, kwargs)
        session.flush()
        return instance

    def delete(self, session: Session, id_value: Any) -> bool:
        """
        Remove a row.

        Returns:
            False when no row has that id
        """
        instance = self.get_by_id(session, id_value)
        if instance is None:
            return False

        session.delete(instance)
        session.flush()
        logger.info("row_deleted", model=self.model_name, id=id_value)
        return True

    def count(self, session: Session) -> int:
        return session.scalar(select(func.count()).select_from(self.model))

    @staticmethod
    def _assign(instance, values: Dict[str, Any]):
        for key, value in values.items():
            if key != 'id':
                setattr(instance, key, value)


class PropertyRepository(BaseRepository):
    """Repository for listings with visibility-aware queries."""

    def __init__(self):
        super().__init__(Property)

    def get_by_listing_id(self, session: Session, listing_id: str) -> Optional[Property]:
        query = select(Property).where(Property.listing_id == listing_id)
        return session.execute(query).scalar_one_or_none()

    def get_visible(
        self,
        session: Session,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Property]:
        """
        Get visible listings in stable insertion order.

        Args:
            session: Database session
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            List of visible listings
        """
        query = (
            select(Property)
            .where(Property.mlg_can_view.is_(True))
            .order_by(Property.created_at, Property.id)
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return session.execute(query).scalars().all()

    def get_visible_by_ids(self, session: Session, property_ids: Iterable[str]) -> List[Property]:
        """
        Resolve ids to visible listings.

        Args:
            session: Database session
            property_ids: Listing ids

        Returns:
            Visible listings (unordered)
        """
        ids = list(property_ids)
        if not ids:
            return []
        query = select(Property).where(
            Property.id.in_(ids),
            Property.mlg_can_view.is_(True),
        )
        return session.execute(query).scalars().all()

    def upsert(self, session: Session, property_data: Dict[str, Any]) -> Property:
        """
        Insert or update a listing by id.

        Args:
            session: Database session
            property_data: Column values (must include id)

        Returns:
            Property instance
        """
        property_id = property_data.get('id')
        if not property_id:
            raise ValueError("id is required for upsert")

        instance = session.get(Property, property_id)
        if instance is None:
            instance = Property(**property_data)
            session.add(instance)
        else:
            self._assign(instance, property_data)

        session.flush()
        logger.info("property_upserted", property_id=property_id)
        return instance

    def upsert_record(self, session: Session, record: PropertyRecord) -> Property:
        """Persist a validated PropertyRecord."""
        data = record.model_dump()
        if record.standard_status is not None:
            data['standard_status'] = record.standard_status.value
        return self.upsert(session, data)

    def bulk_upsert_records(self, session: Session, records: Iterable[PropertyRecord]) -> int:
        count = 0
        for record in records:
            self.upsert_record(session, record)
            count += 1
        logger.info("properties_bulk_upserted", count=count)
        return count


class SellerUpdateRepository(BaseRepository):
    """Repository for seller-update watches."""

    def __init__(self):
        super().__init__(SellerUpdate)

    def get_active(self, session: Session) -> List[SellerUpdate]:
        query = (
            select(SellerUpdate)
            .where(SellerUpdate.is_active.is_(True))
            .order_by(SellerUpdate.created_at, SellerUpdate.id)
        )
        return session.execute(query).scalars().all()

    def mark_sent(self, session: Session, seller_update_id: str, sent_at: datetime) -> Optional[SellerUpdate]:
        """
        Advance the new-listings watermark.

        Args:
            session: Database session
            seller_update_id: Watch id
            sent_at: Time the digest was produced

        Returns:
            Updated watch or None when it no longer exists
        """
        return self.update(session, seller_update_id, last_sent_at=sent_at)
