"""
Tests for SellerUpdateService.
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.cma.db.base import Base
from src.cma.db.models import SellerUpdate
from src.cma.errors import SellerUpdateNotFoundError
from src.cma.models.property_record import PropertyRecord
from src.cma.seller_updates.service import SellerUpdateService
from src.cma.store.memory import InMemoryPropertyStore

NOW = datetime(2024, 6, 10, 14, 0, tzinfo=timezone.utc)


@pytest.fixture
def session():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    sess = Session()
    yield sess
    sess.close()
    Base.metadata.drop_all(engine)


@pytest.fixture
def store():
    return InMemoryPropertyStore([
        PropertyRecord(id="1", postal_code="78701", standard_status="Active", list_price=400000,
                       modification_timestamp="2024-06-05T00:00:00Z"),
        PropertyRecord(id="2", postal_code="78701", standard_status="Closed", list_price=520000,
                       close_price=505000, modification_timestamp="2024-05-01T00:00:00Z"),
        PropertyRecord(id="3", postal_code="78745", standard_status="Active", list_price=350000),
    ])


def _watch(session, watch_id, **fields):
    data = {
        "id": watch_id,
        "name": f"Watch {watch_id}",
        "email": f"{watch_id}@example.com",
        "postal_code": "78701",
        "email_frequency": "weekly",
        "is_active": True,
    }
    data.update(fields)
    session.add(SellerUpdate(**data))
    session.commit()


class TestSellerUpdateService:
    """Tests for run_due_updates and send_now."""

    def test_due_watch_produces_digest_and_advances_last_sent(self, session, store):
        _watch(session, "w1", last_sent_at=datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc))

        digests = SellerUpdateService(session, store).run_due_updates(NOW)

        assert len(digests) == 1
        digest = digests[0]
        assert digest.seller_update_id == "w1"
        assert digest.match.total_matches == 2
        assert digest.match.new_listings_count == 1
        assert digest.market_summary.sold_listings == 1
        assert digest.next_send_at == datetime(2024, 6, 17, 9, 0, tzinfo=timezone.utc)

        session.commit()
        assert session.get(SellerUpdate, "w1").last_sent_at.replace(tzinfo=timezone.utc) == NOW

    def test_not_yet_due_is_skipped(self, session, store):
        _watch(session, "w1", last_sent_at=datetime(2024, 6, 8, 9, 0, tzinfo=timezone.utc))
        assert SellerUpdateService(session, store).run_due_updates(NOW) == []

    def test_inactive_is_skipped(self, session, store):
        _watch(session, "w1", is_active=False)
        assert SellerUpdateService(session, store).run_due_updates(NOW) == []

    def test_no_matches_keeps_last_sent(self, session, store):
        _watch(session, "w1", postal_code="90210")

        assert SellerUpdateService(session, store).run_due_updates(NOW) == []
        assert session.get(SellerUpdate, "w1").last_sent_at is None

    def test_send_now_ignores_schedule(self, session, store):
        _watch(session, "w1", last_sent_at=datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc))

        digest = SellerUpdateService(session, store).send_now("w1", NOW)

        assert digest is not None
        assert digest.match.total_matches == 2

    def test_send_now_unknown_watch(self, session, store):
        with pytest.raises(SellerUpdateNotFoundError):
            SellerUpdateService(session, store).send_now("missing", NOW)
