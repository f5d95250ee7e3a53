"""
Tests for search and seller-update criteria models.
"""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.cma.models.criteria import (
    EmailFrequency,
    NumericRange,
    SearchCriteria,
    SellerUpdateCriteria,
)
from src.cma.transformers.status_normalizer import StandardStatus


class TestNumericRange:
    """Tests for NumericRange."""

    def test_inclusive_bounds(self):
        bound = NumericRange(min=100, max=200)
        assert bound.contains(Decimal("100"))
        assert bound.contains(Decimal("200"))
        assert not bound.contains(Decimal("99.99"))
        assert not bound.contains(Decimal("200.01"))

    def test_open_sides(self):
        assert NumericRange(min=100).contains(Decimal("1000000"))
        assert NumericRange(max=100).contains(Decimal("1"))

    def test_missing_value_fails_active_bound(self):
        assert not NumericRange(min=1).contains(None)
        assert NumericRange().contains(None)


class TestSearchCriteria:
    """Tests for SearchCriteria construction."""

    def test_flat_bounds_are_folded(self):
        criteria = SearchCriteria.model_validate({
            "listPriceMin": "300000",
            "listPriceMax": 500000,
            "year_built_min": 1990,
            "livingArea.max": "2500",
        })
        assert criteria.list_price == NumericRange(min=300000, max=500000)
        assert criteria.year_built.min == Decimal("1990")
        assert criteria.living_area.max == Decimal("2500")

    def test_nested_bounds(self):
        criteria = SearchCriteria.model_validate({"bedrooms": {"min": 3}})
        assert criteria.bedrooms.min == Decimal("3")
        assert criteria.bedrooms.max is None

    def test_status_accepts_single_value_and_codes(self):
        assert SearchCriteria(status="Active").status == (StandardStatus.ACTIVE,)
        assert SearchCriteria(status=["A", "sold", "Closed"]).status == (
            StandardStatus.ACTIVE,
            StandardStatus.CLOSED,
        )

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            SearchCriteria(status=["Active", "Coming Soon"])

    def test_value_sets_and_aliases(self):
        criteria = SearchCriteria.model_validate({
            "zipCodes": ["78701", " 78702 ", ""],
            "schoolDistrict": "Austin ISD",
            "cities": "Austin",
        })
        assert criteria.postal_codes == ("78701", "78702")
        assert criteria.school_districts == ("Austin ISD",)
        assert criteria.cities == ("Austin",)

    def test_close_date_from(self):
        criteria = SearchCriteria.model_validate({"closeDateFrom": "2024-01-01"})
        assert criteria.close_date_from == date(2024, 1, 1)

    def test_criteria_are_frozen(self):
        criteria = SearchCriteria(cities=["Austin"])
        with pytest.raises(ValidationError):
            criteria.cities = ("Dallas",)

    def test_unknown_keys_are_ignored(self):
        assert SearchCriteria.model_validate({"sortBy": "price"}) == SearchCriteria()


class TestSellerUpdateCriteria:
    """Tests for SellerUpdateCriteria."""

    def test_defaults(self):
        criteria = SellerUpdateCriteria(postal_code="78701")
        assert criteria.email_frequency == EmailFrequency.WEEKLY
        assert criteria.is_active is True
        assert criteria.last_sent_at is None

    def test_unknown_frequency_falls_back_to_weekly(self):
        assert SellerUpdateCriteria(email_frequency="quarterly").email_frequency == EmailFrequency.WEEKLY
        assert SellerUpdateCriteria(email_frequency="Bi-Weekly").email_frequency == EmailFrequency.BI_WEEKLY

    def test_last_sent_at_is_utc(self):
        criteria = SellerUpdateCriteria.model_validate({"lastSentAt": "2024-05-01T09:00:00"})
        assert criteria.last_sent_at == datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
