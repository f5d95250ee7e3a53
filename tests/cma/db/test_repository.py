"""
Tests for Repository Pattern

Tests CRUD operations, upserts and visibility-aware queries.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.cma.db.base import Base
from src.cma.db.models import Property, SellerUpdate
from src.cma.db.repository import PropertyRepository, SellerUpdateRepository
from src.cma.models.property_record import PropertyRecord


@pytest.fixture(scope="function")
def test_db():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    Session = sessionmaker(bind=engine)
    session = Session()

    yield session

    session.close()
    Base.metadata.drop_all(engine)


class TestPropertyRepository:
    """Tests for PropertyRepository."""

    def test_create_and_get(self, test_db):
        repo = PropertyRepository()
        repo.create(test_db, id="p1", listing_id="MLS1", list_price=Decimal("350000"))
        test_db.commit()

        found = repo.get_by_id(test_db, "p1")
        assert found.listing_id == "MLS1"
        assert repo.get_by_listing_id(test_db, "MLS1").id == "p1"
        assert repo.count(test_db) == 1

    def test_upsert_inserts_then_updates(self, test_db):
        repo = PropertyRepository()
        repo.upsert(test_db, {"id": "p1", "list_price": Decimal("300000"), "city": "Austin"})
        repo.upsert(test_db, {"id": "p1", "list_price": Decimal("310000")})
        test_db.commit()

        stored = repo.get_by_id(test_db, "p1")
        assert stored.list_price == Decimal("310000")
        assert stored.city == "Austin"
        assert repo.count(test_db) == 1

    def test_upsert_requires_id(self, test_db):
        with pytest.raises(ValueError):
            PropertyRepository().upsert(test_db, {"list_price": Decimal("1")})

    def test_upsert_record_stores_status_value(self, test_db):
        repo = PropertyRepository()
        repo.upsert_record(test_db, PropertyRecord(id="p1", standard_status="AU", list_price=420000))
        test_db.commit()

        assert repo.get_by_id(test_db, "p1").standard_status == "Active Under Contract"

    def test_bulk_upsert_records(self, test_db):
        repo = PropertyRepository()
        written = repo.bulk_upsert_records(
            test_db,
            [PropertyRecord(id=f"p{i}", list_price=100000 * (i + 1)) for i in range(3)],
        )
        test_db.commit()
        assert written == 3
        assert repo.count(test_db) == 3

    def test_visible_queries_exclude_hidden(self, test_db):
        repo = PropertyRepository()
        repo.create(test_db, id="a", mlg_can_view=True)
        repo.create(test_db, id="b", mlg_can_view=False)
        repo.create(test_db, id="c", mlg_can_view=True)
        test_db.commit()

        assert [p.id for p in repo.get_visible(test_db)] == ["a", "c"]
        assert [p.id for p in repo.get_visible(test_db, limit=1, offset=1)] == ["c"]
        assert {p.id for p in repo.get_visible_by_ids(test_db, ["a", "b", "zzz"])} == {"a"}
        assert repo.get_visible_by_ids(test_db, []) == []

    def test_delete(self, test_db):
        repo = PropertyRepository()
        repo.create(test_db, id="p1")
        assert repo.delete(test_db, "p1") is True
        assert repo.delete(test_db, "p1") is False


class TestSellerUpdateRepository:
    """Tests for SellerUpdateRepository."""

    def test_get_active_and_mark_sent(self, test_db):
        repo = SellerUpdateRepository()
        repo.create(test_db, id="w1", name="Smith", email="s@example.com", postal_code="78701")
        repo.create(test_db, id="w2", name="Jones", email="j@example.com", postal_code="78702",
                    is_active=False)
        test_db.commit()

        assert [w.id for w in repo.get_active(test_db)] == ["w1"]

        sent_at = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
        updated = repo.mark_sent(test_db, "w1", sent_at)
        assert updated.last_sent_at == sent_at
        assert repo.mark_sent(test_db, "missing", sent_at) is None

    def test_defaults(self, test_db):
        repo = SellerUpdateRepository()
        watch = repo.create(test_db, id="w1", name="Smith", email="s@example.com", postal_code="78701")
        test_db.commit()
        assert watch.email_frequency == "weekly"
        assert watch.is_active is True
        assert isinstance(test_db.get(SellerUpdate, "w1"), SellerUpdate)
        assert test_db.get(Property, "w1") is None
