"""
Tests for the listing loader script.
"""
import json
from contextlib import contextmanager
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from scripts.load_listings import load_listings, parse_listings
from src.cma.analysis.cache import StatisticsCache
from src.cma.analysis.statistics import StatisticsAggregator
from src.cma.db.base import Base
from src.cma.store.database import SqlAlchemyPropertyStore


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    Base.metadata.drop_all(engine)


@pytest.fixture
def session_scope(session_factory):
    @contextmanager
    def scope():
        session = session_factory()
        try:
            yield session
            session.commit()
        finally:
            session.close()

    return scope


def _write(tmp_path, listings):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps(listings))
    return path


def test_parse_listings_skips_invalid():
    records = parse_listings([{"id": "p1", "listPrice": 300000}, {"listPrice": 1}])
    assert [r.id for r in records] == ["p1"]


def test_load_accepts_value_envelope(tmp_path, session_scope):
    path = _write(tmp_path, {"value": [{"id": "p1"}, {"id": "p2"}]})
    assert load_listings(path, session_scope=session_scope) == 2


def test_reload_invalidates_cached_statistics(tmp_path, session_factory, session_scope):
    load_listings(_write(tmp_path, [{"id": "p1", "listPrice": 300000}]), session_scope=session_scope)

    cache = StatisticsCache(ttl_seconds=60, prefix="t")
    session = session_factory()
    before = StatisticsAggregator(SqlAlchemyPropertyStore(session), cache=cache).aggregate(["p1"])
    session.close()
    assert before.price.range.max == Decimal(300000)

    load_listings(
        _write(tmp_path, [{"id": "p1", "listPrice": 325000}]),
        cache=cache,
        session_scope=session_scope,
    )

    session = session_factory()
    after = StatisticsAggregator(SqlAlchemyPropertyStore(session), cache=cache).aggregate(["p1"])
    session.close()
    assert after.price.range.max == Decimal(325000)
    assert cache.hits == 0


def test_reload_invalidates_redis_entries(tmp_path, session_scope):
    client = MagicMock()
    client.smembers.return_value = {"t:k1"}
    client.delete.return_value = 1
    cache = StatisticsCache(client=client, prefix="t")

    load_listings(
        _write(tmp_path, [{"id": "p1", "listPrice": 1}]),
        cache=cache,
        session_scope=session_scope,
    )

    client.smembers.assert_called_once_with("t:idx:p1")
    client.delete.assert_any_call("t:k1")
    client.delete.assert_any_call("t:idx:p1")
