"""
Analysis Result Models

Pydantic models returned by the statistics, timeline and seller-update
components. Decimals serialize as JSON numbers.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from src.cma.models.property_record import PropertyRecord
from src.cma.transformers.status_normalizer import StandardStatus

JsonDecimal = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]

ZERO = Decimal("0")


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatRange(_ResultModel):
    """Smallest and largest value of a metric."""
    min: JsonDecimal = ZERO
    max: JsonDecimal = ZERO


class StatMetricSummary(_ResultModel):
    """
    Range, average and median for one derived metric.

    An all-zero summary means the metric had no usable input values.
    """
    range: StatRange = Field(default_factory=StatRange)
    average: JsonDecimal = ZERO
    median: JsonDecimal = ZERO

    @classmethod
    def empty(cls) -> "StatMetricSummary":
        return cls()


class StatisticsResult(_ResultModel):
    """One StatMetricSummary per tracked CMA metric."""
    price: StatMetricSummary
    price_per_sq_ft: StatMetricSummary
    days_on_market: StatMetricSummary
    living_area: StatMetricSummary
    lot_size: StatMetricSummary
    acres: StatMetricSummary
    bedrooms: StatMetricSummary
    bathrooms: StatMetricSummary
    year_built: StatMetricSummary


class TimelineDataPoint(_ResultModel):
    """One listing on the price-over-time chart."""
    date: date
    price: JsonDecimal
    status: Optional[StandardStatus] = None
    property_id: str
    address: str


class SellerUpdateMatch(_ResultModel):
    """
    Listings matching a seller-update watch.

    properties is truncated for display; both counts cover the full match.
    """
    properties: List[PropertyRecord] = Field(default_factory=list)
    new_listings_count: int = 0
    total_matches: int = 0


class MarketSummary(_ResultModel):
    """Best-effort market snapshot for a seller-update digest."""
    total_listings: int
    active_listings: int
    pending_listings: int
    sold_listings: int
    avg_list_price: JsonDecimal
    avg_active_price: JsonDecimal
    avg_sold_price: JsonDecimal
    avg_days_on_market: JsonDecimal
    lowest_price: JsonDecimal
    highest_price: JsonDecimal
    avg_price_per_sqft: JsonDecimal


class SellerUpdateDigest(_ResultModel):
    """Everything the email collaborator needs to render one seller update."""
    seller_update_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    match: SellerUpdateMatch
    market_summary: Optional[MarketSummary] = None
    sent_at: datetime
    next_send_at: datetime
