"""
Rental Listing Detection

Lease listings share the MLS feed with sales; their "price" is a monthly
rent. They are dropped before statistics and timelines are built.
"""
from decimal import Decimal
from typing import Iterable, List, Optional

from config.settings import settings
from src.cma.models.property_record import PropertyRecord
from src.cma.transformers.field_resolution import resolve_effective_price
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def is_likely_rental(record: PropertyRecord, ceiling: Optional[Decimal] = None) -> bool:
    """
    Check whether a listing is priced like a lease.

    Args:
        record: Listing to test
        ceiling: Price below which a listing is a rental
            (defaults to settings.rental_price_ceiling)

    Returns:
        True when the effective price is positive and below the ceiling
    """
    if ceiling is None:
        ceiling = Decimal(str(settings.rental_price_ceiling))
    price = resolve_effective_price(record)
    return price is not None and price < ceiling


def exclude_rentals(
    records: Iterable[PropertyRecord],
    ceiling: Optional[Decimal] = None,
) -> List[PropertyRecord]:
    """
    Drop rental listings, logging each one.

    Args:
        records: Listings to screen
        ceiling: Optional override of the rental price ceiling

    Returns:
        Sale listings only, in input order
    """
    kept = []
    for record in records:
        if is_likely_rental(record, ceiling):
            logger.info(
                "rental_listing_excluded",
                property_id=record.id,
                address=record.unparsed_address,
                status=record.standard_status.value if record.standard_status else None,
                price=str(resolve_effective_price(record)),
            )
            continue
        kept.append(record)
    return kept
