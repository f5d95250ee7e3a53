"""
Run Due Seller Updates

Matches every due seller-update watch against the listing store, advances
last_sent_at and prints one digest per watch for the email sender.

Usage:
    python scripts/run_seller_updates.py [--dry-run]
"""
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
from datetime import datetime, timezone

from src.cma.db import get_db_session
from src.cma.seller_updates import SellerUpdateService
from src.cma.store.database import SqlAlchemyPropertyStore
from src.cma.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def run_seller_updates(dry_run: bool = False) -> int:
    """
    Process due seller updates.

    Args:
        dry_run: Build digests without committing last_sent_at

    Returns:
        Number of digests produced
    """
    now = datetime.now(timezone.utc)

    with get_db_session(commit=not dry_run) as session:
        service = SellerUpdateService(session, SqlAlchemyPropertyStore(session))
        digests = service.run_due_updates(now)

        for digest in digests:
            print(digest.model_dump_json(by_alias=True))

    if dry_run:
        logger.info("seller_updates_dry_run", digests=len(digests))

    return len(digests)


def main():
    parser = argparse.ArgumentParser(description="Produce digests for due seller updates")
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Do not record the send time'
    )
    args = parser.parse_args()

    setup_logging()
    count = run_seller_updates(dry_run=args.dry_run)
    logger.info("seller_updates_run_complete", digests=count, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
