"""
Seller Updates

Watch matching, market summaries and send scheduling.
"""
from src.cma.seller_updates.matcher import (
    SellerUpdateMatcher,
    calculate_market_summary,
    count_new_listings,
    normalize_text,
)
from src.cma.seller_updates.schedule import calculate_next_send_date, is_due, parse_frequency
from src.cma.seller_updates.service import SellerUpdateService

__all__ = [
    "SellerUpdateMatcher",
    "calculate_market_summary",
    "count_new_listings",
    "normalize_text",
    "calculate_next_send_date",
    "is_due",
    "parse_frequency",
    "SellerUpdateService",
]
