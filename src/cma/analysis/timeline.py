"""
Timeline Extractor

Turns a comparable set into chronologically ordered price points for the
CMA price-over-time chart.
"""
from typing import Iterable, List, Sequence

from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import TimelineDataPoint
from src.cma.search.rentals import exclude_rentals
from src.cma.store.base import PropertyStore, unique_ids
from src.cma.transformers.field_resolution import to_decimal
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def build_timeline(records: Sequence[PropertyRecord]) -> List[TimelineDataPoint]:
    """
    Build timeline points from records.

    A record contributes a point only when it has a listing contract date,
    a list price (zero included) and an address. Points are sorted ascending by
    date; ties keep input order.

    Args:
        records: Comparable listings

    Returns:
        Ordered timeline points (possibly empty)
    """
    points = []
    for record in records:
        price = to_decimal(record.list_price)
        if record.listing_contract_date is None or price is None or not record.unparsed_address:
            continue
        points.append(
            TimelineDataPoint(
                date=record.listing_contract_date,
                price=price,
                status=record.standard_status,
                property_id=record.id,
                address=record.unparsed_address,
            )
        )

    points.sort(key=lambda point: point.date)
    return points


class TimelineExtractor:
    """Resolves ids through a store and builds the price timeline."""

    def __init__(self, store: PropertyStore, exclude_rental_listings: bool = False):
        self.store = store
        self.exclude_rental_listings = exclude_rental_listings

    def timeline(self, property_ids: Iterable[str]) -> List[TimelineDataPoint]:
        """
        Timeline for a comparable set.

        Unknown and hidden ids are skipped; an empty result is not an error.

        Args:
            property_ids: Ids of the comparable listings

        Returns:
            Ordered timeline points
        """
        ids = unique_ids(property_ids)
        records = self.store.get_visible_by_ids(ids)
        if self.exclude_rental_listings:
            records = exclude_rentals(records)

        points = build_timeline(records)
        logger.info(
            "timeline_built",
            requested=len(ids),
            resolved=len(records),
            points=len(points),
        )
        return points
