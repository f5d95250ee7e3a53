"""
Load Listings

Validates a JSON export of RESO listings and upserts them into the
properties table. Records that fail validation are logged and skipped.

Usage:
    python scripts/load_listings.py listings.json [--create-tables]
"""
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import json
from typing import Callable, List, Optional

from pydantic import ValidationError

from src.cma.analysis.cache import StatisticsCache, build_statistics_cache
from src.cma.db import PropertyRepository, create_all_tables, get_db_session
from src.cma.models import PropertyRecord
from src.cma.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def parse_listings(raw_listings: List[dict]) -> List[PropertyRecord]:
    """
    Validate raw listing dicts.

    Args:
        raw_listings: Listing dicts with RESO camelCase or snake_case keys

    Returns:
        Valid records, in input order
    """
    records = []
    for index, raw in enumerate(raw_listings):
        try:
            records.append(PropertyRecord.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "listing_validation_failed",
                index=index,
                listing_id=raw.get("listingId") or raw.get("listing_id"),
                errors=e.error_count(),
            )
    return records


def load_listings(
    path: Path,
    cache: Optional[StatisticsCache] = None,
    session_scope: Callable = get_db_session,
) -> int:
    """
    Upsert listings from a JSON file.

    Cached statistics covering any written listing are invalidated once the
    upsert has committed.

    Args:
        path: File holding a JSON array of listings (or {"value": [...]})
        cache: Statistics cache to invalidate
        session_scope: Session context manager factory

    Returns:
        Number of listings written
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    raw_listings = payload.get("value", []) if isinstance(payload, dict) else payload
    records = parse_listings(raw_listings)
    logger.info("listings_parsed", total=len(raw_listings), valid=len(records))

    with session_scope() as session:
        written = PropertyRepository().bulk_upsert_records(session, records)

    if cache is not None and records:
        removed = cache.invalidate_properties(record.id for record in records)
        logger.info("statistics_cache_refreshed", listings=len(records), removed=removed)
    return written


def main():
    parser = argparse.ArgumentParser(description="Load MLS listings into the property store")
    parser.add_argument('path', type=Path, help='JSON file of listings')
    parser.add_argument(
        '--create-tables',
        action='store_true',
        help='Create missing tables before loading'
    )
    args = parser.parse_args()

    setup_logging()
    if args.create_tables:
        create_all_tables()

    written = load_listings(args.path, cache=build_statistics_cache())
    logger.info("listings_loaded", written=written)


if __name__ == "__main__":
    main()
