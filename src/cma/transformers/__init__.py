"""
Transformers

Status normalization and numeric field coercion shared by every component.
"""
from src.cma.transformers.status_normalizer import (
    StandardStatus,
    normalize_status,
    is_active_status,
    is_closed_status,
    is_under_contract_status,
)
from src.cma.transformers.field_resolution import (
    BATHROOMS_PRECEDENCE,
    DAYS_ON_MARKET_PRECEDENCE,
    resolve_acres,
    resolve_bathrooms,
    resolve_days_on_market,
    resolve_effective_price,
    resolve_first_positive,
    resolve_price_per_square_foot,
    to_decimal,
    to_positive_decimal,
)

__all__ = [
    "StandardStatus",
    "normalize_status",
    "is_active_status",
    "is_closed_status",
    "is_under_contract_status",
    "BATHROOMS_PRECEDENCE",
    "DAYS_ON_MARKET_PRECEDENCE",
    "resolve_acres",
    "resolve_bathrooms",
    "resolve_days_on_market",
    "resolve_effective_price",
    "resolve_first_positive",
    "resolve_price_per_square_foot",
    "to_decimal",
    "to_positive_decimal",
]
