"""
CMA Router

Statistics and price timeline for a comparable set.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from src.cma.analysis.statistics import StatisticsAggregator
from src.cma.analysis.timeline import TimelineExtractor
from src.cma.api.dependencies import get_statistics_aggregator, get_timeline_extractor
from src.cma.api.schemas import PropertyIdsRequest
from src.cma.errors import NoPropertiesFoundError
from src.cma.models.results import StatisticsResult, TimelineDataPoint

router = APIRouter(prefix="/api/v1/cma", tags=["cma"])


@router.post("/statistics", response_model=StatisticsResult)
def get_statistics(
    request: PropertyIdsRequest,
    aggregator: StatisticsAggregator = Depends(get_statistics_aggregator),
):
    """
    Range, average and median per metric for the comparable set.

    Raises:
        HTTPException: 404 if no id resolves to a visible listing
    """
    aggregator.exclude_rental_listings = request.exclude_rentals
    try:
        return aggregator.aggregate(request.property_ids)
    except NoPropertiesFoundError as e:
        raise HTTPException(
            status_code=404,
            detail={"message": str(e), "propertyIds": e.property_ids},
        )


@router.post("/timeline", response_model=List[TimelineDataPoint])
def get_timeline(
    request: PropertyIdsRequest,
    extractor: TimelineExtractor = Depends(get_timeline_extractor),
):
    """Chronological price points for the comparable set (possibly empty)."""
    extractor.exclude_rental_listings = request.exclude_rentals
    return extractor.timeline(request.property_ids)
