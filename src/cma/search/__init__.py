"""
Property Search

Criteria filter evaluator, search entry points and rental screening.
"""
from src.cma.search.filters import CriteriaFilter, filter_properties
from src.cma.search.rentals import exclude_rentals, is_likely_rental
from src.cma.search.service import PropertySearchService

__all__ = [
    "CriteriaFilter",
    "filter_properties",
    "exclude_rentals",
    "is_likely_rental",
    "PropertySearchService",
]
