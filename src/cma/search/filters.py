"""
Criteria Filter Evaluator

Turns a SearchCriteria into a predicate over PropertyRecords. Used for ad-hoc
buyer search and for CMA comparable selection.

Matching rules:
- every populated criterion is ANDed; empty criteria impose nothing
- numeric bounds are inclusive on both ends
- city and subdivision match as case-insensitive substrings
- status, postal code, school, district and county match exactly
- a record missing a field referenced by an active criterion is excluded
- invisible records never match
"""
from itertools import islice
from typing import Iterable, List, Optional

from src.cma.models.criteria import (
    EXACT_FIELDS,
    FLAG_FIELDS,
    RANGE_FIELDS,
    SearchCriteria,
)
from src.cma.models.property_record import PropertyRecord
from src.cma.transformers.field_resolution import to_decimal
from src.cma.transformers.status_normalizer import StandardStatus
from src.cma.utils.logger import get_logger

logger = get_logger(__name__)


def _contains_any(value: Optional[str], needles: Iterable[str]) -> bool:
    """Case-insensitive substring match against any needle."""
    if not value:
        return False
    haystack = value.lower()
    return any(needle.lower() in haystack for needle in needles)


def _in_set(value: Optional[str], accepted: Iterable[str]) -> bool:
    if value is None:
        return False
    return value.strip() in accepted


class CriteriaFilter:
    """
    Evaluates SearchCriteria against property records.

    matches() is the single predicate; apply() runs it over a collection
    and paginates, so bulk and per-record results always agree.
    """

    def matches(self, record: PropertyRecord, criteria: SearchCriteria) -> bool:
        """
        Check one record against every populated criterion.

        Args:
            record: Listing to test
            criteria: Search criteria

        Returns:
            True if the record satisfies all criteria and is visible
        """
        if not record.is_visible:
            return False

        if criteria.status and record.standard_status not in criteria.status:
            return False

        for criterion, field_name in RANGE_FIELDS.items():
            bound = getattr(criteria, criterion)
            if bound is None or bound.is_open:
                continue
            if not bound.contains(to_decimal(getattr(record, field_name))):
                return False

        if criteria.cities and not _contains_any(record.city, criteria.cities):
            return False
        if criteria.subdivisions and not _contains_any(record.subdivision, criteria.subdivisions):
            return False

        if criteria.postal_codes and not _in_set(record.postal_code, criteria.postal_codes):
            return False
        if criteria.counties and not _in_set(record.county_or_parish, criteria.counties):
            return False
        if criteria.school_districts and not _in_set(record.school_district, criteria.school_districts):
            return False
        if criteria.elementary_schools and not _in_set(record.elementary_school, criteria.elementary_schools):
            return False
        if criteria.middle_schools and not _in_set(record.middle_or_junior_school, criteria.middle_schools):
            return False
        if criteria.high_schools and not _in_set(record.high_school, criteria.high_schools):
            return False
        if criteria.schools and not any(
            _in_set(name, criteria.schools) for name in record.school_names()
        ):
            return False

        for criterion, field_name in FLAG_FIELDS.items():
            wanted = getattr(criteria, criterion)
            if wanted is not None and getattr(record, field_name) is not wanted:
                return False

        for criterion, field_name in EXACT_FIELDS.items():
            wanted = getattr(criteria, criterion)
            if wanted is not None and getattr(record, field_name) != wanted:
                return False

        if criteria.close_date_from is not None and record.standard_status == StandardStatus.CLOSED:
            if record.close_date is None or record.close_date < criteria.close_date_from:
                return False

        return True

    def apply(
        self,
        properties: Iterable[PropertyRecord],
        criteria: SearchCriteria,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[PropertyRecord]:
        """
        Filter a collection and paginate the eligible records.

        Args:
            properties: Records to evaluate (consumed lazily)
            criteria: Search criteria
            limit: Maximum records returned (None for no cap)
            offset: Eligible records to skip

        Returns:
            Matching records in input order; empty when nothing matches
        """
        offset = max(offset, 0)
        if limit is not None:
            limit = max(limit, 0)
        eligible = (record for record in properties if self.matches(record, criteria))
        stop = offset + limit if limit is not None else None
        results = list(islice(eligible, offset, stop))

        logger.debug(
            "criteria_filter_applied",
            returned=len(results),
            limit=limit,
            offset=offset,
        )
        return results


_default_filter = CriteriaFilter()


def filter_properties(
    properties: Iterable[PropertyRecord],
    criteria: SearchCriteria,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[PropertyRecord]:
    """Module-level shortcut for CriteriaFilter().apply()."""
    return _default_filter.apply(properties, criteria, limit=limit, offset=offset)
