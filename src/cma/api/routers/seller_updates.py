"""
Seller Updates Router

Preview a watch's matches and trigger an immediate digest.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from src.cma.api.dependencies import (
    get_db,
    get_property_store,
    get_seller_update_matcher,
    get_seller_update_service,
)
from src.cma.api.schemas import SellerUpdateMatchRequest, SellerUpdateMatchResponse
from src.cma.errors import SellerUpdateNotFoundError
from src.cma.models.results import SellerUpdateDigest
from src.cma.seller_updates.matcher import SellerUpdateMatcher, calculate_market_summary
from src.cma.seller_updates.service import SellerUpdateService
from src.cma.store.base import PropertyStore

router = APIRouter(prefix="/api/v1/seller-updates", tags=["seller-updates"])


@router.post("/match", response_model=SellerUpdateMatchResponse)
def match_seller_update(
    request: SellerUpdateMatchRequest,
    store: PropertyStore = Depends(get_property_store),
    matcher: SellerUpdateMatcher = Depends(get_seller_update_matcher),
):
    """
    Listings a watch covers plus a market summary over all of them.

    Args:
        request: Watch criteria, optional new-listing cutoff and result limit
        store: Property store
        matcher: Seller-update matcher

    Returns:
        Match counts, truncated listings and market summary
    """
    matches = matcher.matching_properties(request.criteria, store.iter_visible())
    match = matcher.match(
        request.criteria,
        matches,
        since_date=request.since_date,
        result_limit=request.result_limit,
    )
    return SellerUpdateMatchResponse(
        match=match,
        market_summary=calculate_market_summary(matches),
    )


@router.post("/{seller_update_id}/send", response_model=Optional[SellerUpdateDigest])
def send_seller_update_now(
    seller_update_id: str,
    db: Session = Depends(get_db),
    service: SellerUpdateService = Depends(get_seller_update_service),
):
    """
    Produce a digest for one watch now and advance its last_sent_at.

    Returns null when the watch currently matches no listings.

    Raises:
        HTTPException: 404 if the watch does not exist
    """
    try:
        digest = service.send_now(seller_update_id)
    except SellerUpdateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    db.commit()
    return digest
