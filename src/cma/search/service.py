"""
Property Search Service

Two entry points over the same filter evaluator:

- get_properties: broad criteria search (default cap 500)
- search_properties: convenience search used by quick lookups (default cap 100)

The defaults differ on purpose and are configured separately.
"""
from typing import List, Optional

from config.settings import settings
from src.cma.models.criteria import SearchCriteria
from src.cma.models.property_record import PropertyRecord
from src.cma.search.filters import CriteriaFilter
from src.cma.store.base import PropertyStore
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


class PropertySearchService:
    """Runs SearchCriteria against a PropertyStore with pagination."""

    def __init__(
        self,
        store: PropertyStore,
        criteria_filter: Optional[CriteriaFilter] = None,
        default_limit: Optional[int] = None,
        convenience_default_limit: Optional[int] = None,
    ):
        self.store = store
        self.criteria_filter = criteria_filter or CriteriaFilter()
        self.default_limit = (
            default_limit if default_limit is not None else settings.search_default_limit
        )
        self.convenience_default_limit = (
            convenience_default_limit
            if convenience_default_limit is not None
            else settings.convenience_search_default_limit
        )

    def get_properties(
        self,
        criteria: SearchCriteria,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[PropertyRecord]:
        """
        Broad criteria search.

        Args:
            criteria: Search criteria
            limit: Result cap (defaults to settings.search_default_limit)
            offset: Eligible results to skip

        Returns:
            Matching visible listings
        """
        effective_limit = limit if limit is not None else self.default_limit
        return self._run("get_properties", criteria, effective_limit, offset)

    def search_properties(
        self,
        criteria: SearchCriteria,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[PropertyRecord]:
        """
        Convenience search.

        Args:
            criteria: Search criteria
            limit: Result cap (defaults to settings.convenience_search_default_limit)
            offset: Eligible results to skip

        Returns:
            Matching visible listings
        """
        effective_limit = limit if limit is not None else self.convenience_default_limit
        return self._run("search_properties", criteria, effective_limit, offset)

    def _run(
        self,
        operation: str,
        criteria: SearchCriteria,
        limit: int,
        offset: int,
    ) -> List[PropertyRecord]:
        results = self.criteria_filter.apply(
            self.store.iter_visible(),
            criteria,
            limit=limit,
            offset=offset,
        )
        logger.info(
            "property_search_completed",
            operation=operation,
            returned=len(results),
            limit=limit,
            offset=offset,
        )
        return results
