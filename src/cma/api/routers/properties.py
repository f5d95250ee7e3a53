"""
Properties Router

Criteria search, quick search and listing detail.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from src.cma.api.dependencies import get_property_store, get_search_service
from src.cma.api.schemas import PropertySearchRequest, PropertySearchResponse
from src.cma.models.criteria import VALUE_SET_FIELDS, SearchCriteria
from src.cma.models.property_record import PropertyRecord
from src.cma.search.service import PropertySearchService
from src.cma.store.base import PropertyStore

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])

PAGINATION_PARAMS = {"limit", "offset"}

# Query parameters that may carry several comma-separated values
LIST_QUERY_PARAMS = (
    {name for field in VALUE_SET_FIELDS + ("status",) for name in (field, to_camel(field))}
    | {"zipCodes", "schoolDistrict"}
)


def criteria_from_query(query_items) -> SearchCriteria:
    """
    Build SearchCriteria from query string items.

    Repeated keys and comma-separated values both become lists for status
    and the value-set criteria; flat bounds such as listPriceMin are folded
    by SearchCriteria itself.

    Raises:
        HTTPException: 422 when the criteria do not validate
    """
    data: Dict[str, Any] = {}
    for key, value in query_items:
        if key in PAGINATION_PARAMS:
            continue
        if key in LIST_QUERY_PARAMS:
            values = [part.strip() for part in value.split(",") if part.strip()]
            data.setdefault(key, []).extend(values)
        else:
            data[key] = value

    try:
        return SearchCriteria.model_validate(data)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )


@router.post("/search", response_model=PropertySearchResponse)
def search_properties(
    request: PropertySearchRequest,
    service: PropertySearchService = Depends(get_search_service),
):
    """
    Criteria search over visible listings.

    Args:
        request: Criteria plus optional limit/offset (limit defaults to 500)
        service: Search service

    Returns:
        Matching listings
    """
    limit = request.limit if request.limit is not None else service.default_limit
    results = service.get_properties(request.criteria, limit=limit, offset=request.offset)
    return PropertySearchResponse(
        properties=results,
        count=len(results),
        limit=limit,
        offset=request.offset,
    )


@router.get("/quick-search", response_model=PropertySearchResponse)
def quick_search(
    request: Request,
    limit: Optional[int] = Query(None, ge=0),
    offset: int = Query(0, ge=0),
    service: PropertySearchService = Depends(get_search_service),
):
    """
    Convenience search from query parameters (limit defaults to 100).

    Example:
        /api/v1/properties/quick-search?status=Active,Pending&listPriceMin=300000
    """
    criteria = criteria_from_query(request.query_params.multi_items())
    effective_limit = limit if limit is not None else service.convenience_default_limit
    results = service.search_properties(criteria, limit=effective_limit, offset=offset)
    return PropertySearchResponse(
        properties=results,
        count=len(results),
        limit=effective_limit,
        offset=offset,
    )


@router.get("/{property_id}", response_model=PropertyRecord)
def get_property_detail(
    property_id: str,
    store: PropertyStore = Depends(get_property_store),
):
    """
    Get one visible listing.

    Raises:
        HTTPException: 404 if the listing is unknown or hidden
    """
    record = store.get(property_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Property not found: {property_id}")
    return record
