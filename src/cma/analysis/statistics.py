"""
Statistics Aggregator

Range, average and median across the CMA metrics of a comparable set.

Metric inputs:
- price: close price for Closed listings, list price otherwise
- price_per_sq_ft: that same price over living area (living area > 0 only)
- days_on_market: days_on_market, then cumulative_days_on_market
- bathrooms: bathrooms_total_integer, then bathrooms_full
- acres: lot_size_acres, then lot_size_square_feet / 43560
- everything else: the field itself

Every input is coerced to Decimal and only strictly positive values are kept.
"""
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from config.settings import settings
from src.cma.errors import NoPropertiesFoundError
from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import StatisticsResult, StatMetricSummary, StatRange
from src.cma.search.rentals import exclude_rentals
from src.cma.store.base import PropertyStore, unique_ids
from src.cma.transformers.field_resolution import (
    resolve_acres,
    resolve_bathrooms,
    resolve_days_on_market,
    resolve_effective_price,
    resolve_price_per_square_foot,
    to_positive_decimal,
)
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)

MetricExtractor = Callable[[PropertyRecord], Optional[Decimal]]

METRIC_EXTRACTORS: Dict[str, MetricExtractor] = {
    "price": resolve_effective_price,
    "price_per_sq_ft": resolve_price_per_square_foot,
    "days_on_market": resolve_days_on_market,
    "living_area": lambda record: to_positive_decimal(record.living_area),
    "lot_size": lambda record: to_positive_decimal(record.lot_size_square_feet),
    "acres": resolve_acres,
    "bedrooms": lambda record: to_positive_decimal(record.bedrooms_total),
    "bathrooms": resolve_bathrooms,
    "year_built": lambda record: to_positive_decimal(record.year_built),
}

METRIC_NAMES = tuple(METRIC_EXTRACTORS)


def median(sorted_values: Sequence[Decimal]) -> Decimal:
    """
    Median of an ascending sequence.

    Even-length input averages the two middle elements; odd-length input
    takes the middle one.

    Args:
        sorted_values: Non-empty values in ascending order

    Returns:
        Median value
    """
    count = len(sorted_values)
    middle = count // 2
    if count % 2 == 0:
        return (sorted_values[middle - 1] + sorted_values[middle]) / 2
    return sorted_values[middle]


def summarize(values: Iterable[Decimal]) -> StatMetricSummary:
    """
    Build a StatMetricSummary from metric values.

    Args:
        values: Strictly positive metric values

    Returns:
        Summary, or the all-zero placeholder when values is empty
    """
    ordered = sorted(values)
    if not ordered:
        return StatMetricSummary.empty()

    return StatMetricSummary(
        range=StatRange(min=ordered[0], max=ordered[-1]),
        average=sum(ordered, Decimal(0)) / len(ordered),
        median=median(ordered),
    )


def extract_metric(records: Iterable[PropertyRecord], metric: str) -> List[Decimal]:
    """Collect the usable values of one metric."""
    extractor = METRIC_EXTRACTORS[metric]
    values = []
    for record in records:
        value = extractor(record)
        if value is not None:
            values.append(value)
    return values


def calculate_statistics(
    records: Sequence[PropertyRecord],
    property_ids: Optional[Iterable[str]] = None,
) -> StatisticsResult:
    """
    Compute every CMA metric over already-resolved records.

    Args:
        records: Visible comparable listings
        property_ids: Requested ids, reported in the error when records is empty

    Returns:
        StatisticsResult

    Raises:
        NoPropertiesFoundError: If records is empty
    """
    if not records:
        raise NoPropertiesFoundError(property_ids)

    summaries = {metric: summarize(extract_metric(records, metric)) for metric in METRIC_NAMES}
    return StatisticsResult(**summaries)


class StatisticsAggregator:
    """
    Resolves property ids through a store and aggregates their metrics.

    Results are computed fresh on every call unless a StatisticsCache is
    supplied; keeping that cache current is the caller's job.
    """

    def __init__(
        self,
        store: PropertyStore,
        cache=None,
        exclude_rental_listings: bool = False,
    ):
        """
        Args:
            store: Property store to resolve ids against
            cache: Optional StatisticsCache
            exclude_rental_listings: Drop lease listings before aggregating
        """
        self.store = store
        self.cache = cache
        self.exclude_rental_listings = exclude_rental_listings

    @property
    def cache_options(self) -> Dict[str, Any]:
        """Options that change the result for a given comparable set."""
        if not self.exclude_rental_listings:
            return {"exclude_rentals": False}
        return {
            "exclude_rentals": True,
            "rental_price_ceiling": str(settings.rental_price_ceiling),
        }

    def aggregate(self, property_ids: Iterable[str]) -> StatisticsResult:
        """
        Compute statistics for a comparable set.

        Args:
            property_ids: Ids of the comparable listings

        Returns:
            StatisticsResult with one summary per metric

        Raises:
            NoPropertiesFoundError: If no id resolves to a visible listing
        """
        ids = unique_ids(property_ids)

        if self.cache is not None:
            cached = self.cache.get(ids, METRIC_NAMES, self.cache_options)
            if cached is not None:
                logger.debug("statistics_cache_hit", property_count=len(ids))
                return cached

        records = self.store.get_visible_by_ids(ids)
        if self.exclude_rental_listings:
            records = exclude_rentals(records)

        if not records:
            logger.warning("statistics_no_properties_found", requested=len(ids))
            raise NoPropertiesFoundError(ids)

        result = calculate_statistics(records, ids)
        logger.info(
            "statistics_calculated",
            requested=len(ids),
            resolved=len(records),
        )

        if self.cache is not None:
            self.cache.set(ids, METRIC_NAMES, result, self.cache_options)
        return result

    def calculate(self, records: Sequence[PropertyRecord]) -> StatisticsResult:
        """Aggregate already-materialized records, bypassing the store and cache."""
        visible = [record for record in records if record.is_visible]
        if self.exclude_rental_listings:
            visible = exclude_rentals(visible)
        return calculate_statistics(visible, [record.id for record in records])
