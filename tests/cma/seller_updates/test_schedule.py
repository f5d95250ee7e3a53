"""
Tests for seller-update scheduling.
"""
from datetime import datetime, timezone

import pytest

from src.cma.models.criteria import EmailFrequency, SellerUpdateCriteria
from src.cma.seller_updates.schedule import calculate_next_send_date, is_due, parse_frequency

BASE = datetime(2024, 1, 31, 15, 42, 10, tzinfo=timezone.utc)


class TestCalculateNextSendDate:
    """Tests for calculate_next_send_date."""

    @pytest.mark.parametrize(
        "frequency,expected",
        [
            ("daily", datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)),
            ("weekly", datetime(2024, 2, 7, 9, 0, tzinfo=timezone.utc)),
            ("bi-weekly", datetime(2024, 2, 14, 9, 0, tzinfo=timezone.utc)),
            ("monthly", datetime(2024, 2, 29, 9, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_intervals(self, frequency, expected):
        assert calculate_next_send_date(frequency, BASE) == expected

    def test_unknown_frequency_is_weekly(self):
        assert calculate_next_send_date("quarterly", BASE) == calculate_next_send_date("weekly", BASE)
        assert calculate_next_send_date(None, BASE) == calculate_next_send_date("weekly", BASE)

    def test_accepts_enum(self):
        assert calculate_next_send_date(EmailFrequency.DAILY, BASE).day == 1

    def test_defaults_to_now(self):
        assert calculate_next_send_date("daily") > datetime.now(timezone.utc).replace(hour=0)


def test_parse_frequency():
    assert parse_frequency(" Monthly ") == EmailFrequency.MONTHLY
    assert parse_frequency("") == EmailFrequency.WEEKLY


class TestIsDue:
    """Tests for is_due."""

    def test_never_sent_is_due(self):
        assert is_due(SellerUpdateCriteria(postal_code="78701"), BASE)

    def test_inactive_is_never_due(self):
        assert not is_due(SellerUpdateCriteria(postal_code="78701", is_active=False), BASE)

    def test_weekly_interval(self):
        criteria = SellerUpdateCriteria(
            postal_code="78701",
            email_frequency="weekly",
            last_sent_at=datetime(2024, 1, 24, 16, 0, tzinfo=timezone.utc),
        )
        assert not is_due(criteria, BASE)
        assert is_due(criteria, datetime(2024, 1, 31, 16, 0, tzinfo=timezone.utc))

    def test_monthly_uses_calendar_months(self):
        criteria = SellerUpdateCriteria(
            postal_code="78701",
            email_frequency="monthly",
            last_sent_at=datetime(2024, 1, 31, 9, 0, tzinfo=timezone.utc),
        )
        assert not is_due(criteria, datetime(2024, 2, 28, 9, 0, tzinfo=timezone.utc))
        assert is_due(criteria, datetime(2024, 2, 29, 9, 0, tzinfo=timezone.utc))
