"""
Seller-Update Service

Runs due seller-update watches: match against the store, summarize the
market, advance last_sent_at and hand digests to the email collaborator.
No email is sent from here.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from src.cma.db.repository import SellerUpdateRepository
from src.cma.errors import SellerUpdateNotFoundError
from src.cma.models.criteria import SellerUpdateCriteria
from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import SellerUpdateDigest
from src.cma.seller_updates.matcher import SellerUpdateMatcher, calculate_market_summary
from src.cma.seller_updates.schedule import calculate_next_send_date, is_due
from src.cma.store.base import PropertyStore
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


class SellerUpdateService:
    """
    Seller-update processing against a database session and a property store.

    The session is owned by the caller; writes are flushed, not committed.
    """

    def __init__(
        self,
        session: Session,
        store: PropertyStore,
        matcher: Optional[SellerUpdateMatcher] = None,
        repository: Optional[SellerUpdateRepository] = None,
    ):
        self.session = session
        self.store = store
        self.matcher = matcher or SellerUpdateMatcher()
        self.repository = repository or SellerUpdateRepository()

    def get_due_updates(self, now: datetime) -> List[SellerUpdateCriteria]:
        """Active watches whose send interval has elapsed."""
        watches = [
            SellerUpdateCriteria.model_validate(row)
            for row in self.repository.get_active(self.session)
        ]
        return [watch for watch in watches if is_due(watch, now)]

    def run_due_updates(self, now: Optional[datetime] = None) -> List[SellerUpdateDigest]:
        """
        Process every due watch.

        Watches with no matching listings are skipped and keep their
        last_sent_at so they are retried on the next run.

        Args:
            now: Processing time (defaults to now, UTC)

        Returns:
            One digest per watch that produced an update
        """
        now = now or datetime.now(timezone.utc)
        due = self.get_due_updates(now)
        logger.info("seller_updates_due", count=len(due))

        if not due:
            return []

        inventory = list(self.store.iter_visible())
        digests = []
        for watch in due:
            digest = self._process(watch, inventory, now)
            if digest is not None:
                digests.append(digest)

        logger.info(
            "seller_updates_processed",
            due=len(due),
            produced=len(digests),
            skipped=len(due) - len(digests),
        )
        return digests

    def send_now(self, seller_update_id: str, now: Optional[datetime] = None) -> Optional[SellerUpdateDigest]:
        """
        Process one watch immediately, ignoring its schedule.

        Raises:
            SellerUpdateNotFoundError: If the watch does not exist
        """
        row = self.repository.get_by_id(self.session, seller_update_id)
        if row is None:
            raise SellerUpdateNotFoundError(seller_update_id)

        now = now or datetime.now(timezone.utc)
        watch = SellerUpdateCriteria.model_validate(row)
        return self._process(watch, list(self.store.iter_visible()), now)

    def _process(
        self,
        watch: SellerUpdateCriteria,
        inventory: List[PropertyRecord],
        now: datetime,
    ) -> Optional[SellerUpdateDigest]:
        matches = self.matcher.matching_properties(watch, inventory)
        if not matches:
            logger.info("seller_update_skipped", seller_update_id=watch.id, reason="no_matches")
            return None

        match = self.matcher.match(watch, matches)
        digest = SellerUpdateDigest(
            seller_update_id=watch.id,
            name=watch.name,
            email=watch.email,
            match=match,
            market_summary=calculate_market_summary(matches),
            sent_at=now,
            next_send_at=calculate_next_send_date(watch.email_frequency, now),
        )

        self.repository.mark_sent(self.session, watch.id, now)
        logger.info(
            "seller_update_digest_created",
            seller_update_id=watch.id,
            total_matches=match.total_matches,
            new_listings=match.new_listings_count,
        )
        return digest
