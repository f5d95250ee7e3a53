"""
Error Types

Exceptions raised by the analysis engine.
"""
from typing import Iterable, Optional


class CMAError(Exception):
    """Base class for analysis engine errors."""


class NoPropertiesFoundError(CMAError):
    """Raised when a statistics request resolves to zero visible properties."""

    def __init__(self, property_ids: Optional[Iterable[str]] = None):
        self.property_ids = sorted(property_ids) if property_ids is not None else []
        super().__init__("No properties found for statistics calculation")


class SellerUpdateNotFoundError(CMAError):
    """Raised when a seller-update watch id does not exist."""

    def __init__(self, seller_update_id: str):
        self.seller_update_id = seller_update_id
        super().__init__(f"Seller update not found: {seller_update_id}")
