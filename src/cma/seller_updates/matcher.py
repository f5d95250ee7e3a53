"""
Seller-Update Matcher

Finds the listings a seller-update watch covers and summarizes that market.

Matching rules:
- postal code, elementary school and property sub type compare after
  trimming and lowercasing
- an empty criterion imposes nothing
- only visible listings match
- a listing is "new" when it was modified strictly after the cutoff
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from config.settings import settings
from src.cma.models.criteria import SellerUpdateCriteria
from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import MarketSummary, SellerUpdateMatch
from src.cma.transformers.field_resolution import (
    to_decimal,
    to_positive_decimal,
    to_utc_datetime,
)
from src.cma.transformers.status_normalizer import (
    StandardStatus,
    is_closed_status,
    is_under_contract_status,
)
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)

WHOLE_UNITS = Decimal("1")


def normalize_text(value: Optional[str]) -> str:
    """Trim and lowercase; None becomes an empty string."""
    return (value or "").strip().lower()


class SellerUpdateMatcher:
    """Evaluates seller-update watches against a listing inventory."""

    def matching_properties(
        self,
        criteria: SellerUpdateCriteria,
        all_properties: Iterable[PropertyRecord],
    ) -> List[PropertyRecord]:
        """
        Every visible listing the watch covers, in input order.

        Args:
            criteria: Seller-update watch
            all_properties: Listing inventory

        Returns:
            Matching listings (untruncated)
        """
        postal_code = normalize_text(criteria.postal_code)
        elementary_school = normalize_text(criteria.elementary_school)
        property_sub_type = normalize_text(criteria.property_sub_type)

        matches = []
        for record in all_properties:
            if postal_code and normalize_text(record.postal_code) != postal_code:
                continue
            if elementary_school and normalize_text(record.elementary_school) != elementary_school:
                continue
            if property_sub_type and normalize_text(record.property_sub_type) != property_sub_type:
                continue
            if not record.is_visible:
                continue
            matches.append(record)
        return matches

    def match(
        self,
        criteria: SellerUpdateCriteria,
        all_properties: Iterable[PropertyRecord],
        since_date: Optional[datetime] = None,
        result_limit: Optional[int] = None,
    ) -> SellerUpdateMatch:
        """
        Match a watch against the inventory.

        Args:
            criteria: Seller-update watch
            all_properties: Listing inventory
            since_date: New-listing cutoff (defaults to criteria.last_sent_at)
            result_limit: Cap on returned properties
                (defaults to settings.seller_update_result_limit)

        Returns:
            SellerUpdateMatch; both counts cover the full match
        """
        if result_limit is None:
            result_limit = settings.seller_update_result_limit

        matches = self.matching_properties(criteria, all_properties)
        new_listings_count = count_new_listings(matches, since_date or criteria.last_sent_at)

        logger.info(
            "seller_update_matched",
            seller_update_id=criteria.id,
            total_matches=len(matches),
            new_listings=new_listings_count,
        )

        return SellerUpdateMatch(
            properties=matches[:max(result_limit, 0)],
            new_listings_count=new_listings_count,
            total_matches=len(matches),
        )


def count_new_listings(records: Iterable[PropertyRecord], cutoff: Optional[datetime]) -> int:
    """
    Count listings modified strictly after the cutoff.

    No cutoff means nothing counts as new; a listing without a modification
    timestamp is never new. Naive datetimes are read as UTC.
    """
    cutoff = to_utc_datetime(cutoff)
    if cutoff is None:
        return 0

    count = 0
    for record in records:
        modified = to_utc_datetime(record.modification_timestamp)
        if modified is not None and modified > cutoff:
            count += 1
    return count


def _average(values: List[Decimal]) -> Decimal:
    if not values:
        return Decimal(0)
    return sum(values, Decimal(0)) / len(values)


def _whole(value: Decimal) -> Decimal:
    return value.quantize(WHOLE_UNITS, rounding=ROUND_HALF_UP)


def calculate_market_summary(properties: List[PropertyRecord]) -> Optional[MarketSummary]:
    """
    Market snapshot for a seller-update digest.

    Averages are rounded half-up to whole units; lowest and highest list
    prices are reported as-is. Price per square foot uses list price over
    positive living area.

    Args:
        properties: Matched listings

    Returns:
        MarketSummary, or None when properties is empty
    """
    if not properties:
        return None

    list_prices = [p for p in (to_decimal(r.list_price) for r in properties) if p is not None]
    active = [r for r in properties if r.standard_status == StandardStatus.ACTIVE]
    closed = [r for r in properties if is_closed_status(r.standard_status)]
    pending = [r for r in properties if is_under_contract_status(r.standard_status)]

    active_prices = [p for p in (to_decimal(r.list_price) for r in active) if p is not None]
    sold_prices = [p for p in (to_decimal(r.close_price) for r in closed) if p is not None]
    days_on_market = [d for d in (to_decimal(r.days_on_market) for r in properties) if d is not None]

    price_per_sqft = []
    for record in properties:
        price = to_decimal(record.list_price)
        area = to_positive_decimal(record.living_area)
        if price is not None and area is not None:
            price_per_sqft.append(price / area)

    return MarketSummary(
        total_listings=len(properties),
        active_listings=len(active),
        pending_listings=len(pending),
        sold_listings=len(closed),
        avg_list_price=_whole(_average(list_prices)),
        avg_active_price=_whole(_average(active_prices)),
        avg_sold_price=_whole(_average(sold_prices)),
        avg_days_on_market=_whole(_average(days_on_market)),
        lowest_price=min(list_prices) if list_prices else Decimal(0),
        highest_price=max(list_prices) if list_prices else Decimal(0),
        avg_price_per_sqft=_whole(_average(price_per_sqft)),
    )
