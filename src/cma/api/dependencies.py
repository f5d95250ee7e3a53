"""
FastAPI Dependencies

Database sessions, the property store and the analysis services built on it.
"""
from functools import lru_cache
from typing import Generator, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from config.settings import settings
from src.cma.analysis.cache import StatisticsCache, build_statistics_cache
from src.cma.analysis.statistics import StatisticsAggregator
from src.cma.analysis.timeline import TimelineExtractor
from src.cma.db.session import SessionLocal
from src.cma.search.service import PropertySearchService
from src.cma.seller_updates.matcher import SellerUpdateMatcher
from src.cma.seller_updates.service import SellerUpdateService
from src.cma.store.base import PropertyStore
from src.cma.store.database import SqlAlchemyPropertyStore


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields:
        SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings():
    return settings


def get_property_store(db: Session = Depends(get_db)) -> PropertyStore:
    return SqlAlchemyPropertyStore(db)


@lru_cache(maxsize=1)
def get_statistics_cache() -> Optional[StatisticsCache]:
    """
    Process-wide statistics cache.

    Returns:
        StatisticsCache (redis-backed when redis_url is reachable), or None
        when caching is disabled
    """
    return build_statistics_cache()


def get_search_service(store: PropertyStore = Depends(get_property_store)) -> PropertySearchService:
    return PropertySearchService(store)


def get_statistics_aggregator(
    store: PropertyStore = Depends(get_property_store),
    cache: Optional[StatisticsCache] = Depends(get_statistics_cache),
) -> StatisticsAggregator:
    return StatisticsAggregator(store, cache=cache)


def get_timeline_extractor(store: PropertyStore = Depends(get_property_store)) -> TimelineExtractor:
    return TimelineExtractor(store)


def get_seller_update_matcher() -> SellerUpdateMatcher:
    return SellerUpdateMatcher()


def get_seller_update_service(
    db: Session = Depends(get_db),
    store: PropertyStore = Depends(get_property_store),
) -> SellerUpdateService:
    return SellerUpdateService(db, store)
