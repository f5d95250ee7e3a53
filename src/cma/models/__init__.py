"""
Data Models

Pydantic models for listings, search criteria and analysis results.
"""
from src.cma.models.property_record import PropertyRecord
from src.cma.models.criteria import (
    EmailFrequency,
    NumericRange,
    SearchCriteria,
    SellerUpdateCriteria,
)
from src.cma.models.results import (
    MarketSummary,
    SellerUpdateDigest,
    SellerUpdateMatch,
    StatisticsResult,
    StatMetricSummary,
    StatRange,
    TimelineDataPoint,
)

__all__ = [
    "PropertyRecord",
    "EmailFrequency",
    "NumericRange",
    "SearchCriteria",
    "SellerUpdateCriteria",
    "MarketSummary",
    "SellerUpdateDigest",
    "SellerUpdateMatch",
    "StatisticsResult",
    "StatMetricSummary",
    "StatRange",
    "TimelineDataPoint",
]
