"""
Tests for the PropertyRecord model.
"""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.cma.models.property_record import PropertyRecord
from src.cma.transformers.status_normalizer import StandardStatus


class TestPropertyRecord:
    """Tests for PropertyRecord validation."""

    def test_accepts_reso_camel_case(self):
        record = PropertyRecord.model_validate({
            "id": "abc-1",
            "listingId": "ACT1234",
            "standardStatus": "Active",
            "listPrice": "525000",
            "bedroomsTotal": "4",
            "livingArea": 2100.5,
            "postalCode": "78701",
            "poolPrivateYN": "Y",
            "mlgCanView": True,
        })

        assert record.listing_id == "ACT1234"
        assert record.standard_status == StandardStatus.ACTIVE
        assert record.list_price == Decimal("525000")
        assert record.bedrooms_total == 4
        assert record.living_area == Decimal("2100.5")
        assert record.pool_private_yn is True

    def test_accepts_snake_case(self):
        record = PropertyRecord(id="1", list_price=300000, city="Austin")
        assert record.list_price == Decimal("300000")
        assert record.city == "Austin"

    def test_non_numeric_values_become_none(self):
        record = PropertyRecord(id="1", list_price="call agent", bedrooms_total="", living_area="n/a")
        assert record.list_price is None
        assert record.bedrooms_total is None
        assert record.living_area is None

    def test_status_codes_are_normalized(self):
        assert PropertyRecord(id="1", standard_status="S").standard_status == StandardStatus.CLOSED
        assert PropertyRecord(id="1", standard_status="Coming Soon").standard_status is None

    def test_dates_and_timestamps(self):
        record = PropertyRecord(
            id="1",
            listing_contract_date="2024-02-01",
            close_date="2024-04-15T00:00:00",
            modification_timestamp="2024-04-16T12:30:00",
        )
        assert record.listing_contract_date == date(2024, 2, 1)
        assert record.close_date == date(2024, 4, 15)
        assert record.modification_timestamp == datetime(2024, 4, 16, 12, 30, tzinfo=timezone.utc)

    def test_numeric_id_is_stringified(self):
        assert PropertyRecord(id=42).id == "42"

    def test_id_is_required(self):
        with pytest.raises(ValidationError):
            PropertyRecord(list_price=100)

    def test_visibility(self):
        assert PropertyRecord(id="1").is_visible
        assert not PropertyRecord(id="1", mlg_can_view=False).is_visible
        assert not PropertyRecord(id="1", mlg_can_view=None).is_visible

    def test_school_names(self):
        record = PropertyRecord(id="1", elementary_school="Oak Elem", high_school="Austin High")
        assert record.school_names() == ("Oak Elem", "Austin High")

    def test_dump_by_alias(self):
        data = PropertyRecord(id="1", list_price=100, flex_listing_yn=False).model_dump(by_alias=True)
        assert data["listPrice"] == Decimal("100")
        assert data["flexListingYN"] is False
