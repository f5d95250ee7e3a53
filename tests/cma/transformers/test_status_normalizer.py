"""
Tests for listing status normalization.
"""
import pytest

from src.cma.transformers.status_normalizer import (
    StandardStatus,
    is_active_status,
    is_closed_status,
    is_under_contract_status,
    normalize_status,
)


class TestNormalizeStatus:
    """Tests for normalize_status."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Active", StandardStatus.ACTIVE),
            ("Active Under Contract", StandardStatus.ACTIVE_UNDER_CONTRACT),
            ("Closed", StandardStatus.CLOSED),
            ("  Pending ", StandardStatus.PENDING),
        ],
    )
    def test_reso_labels(self, raw, expected):
        assert normalize_status(raw) == expected

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("A", StandardStatus.ACTIVE),
            ("AU", StandardStatus.ACTIVE_UNDER_CONTRACT),
            ("P", StandardStatus.PENDING),
            ("C", StandardStatus.CLOSED),
            ("S", StandardStatus.CLOSED),
            ("Lc", StandardStatus.ACTIVE_UNDER_CONTRACT),
            ("Sc", StandardStatus.ACTIVE_UNDER_CONTRACT),
        ],
    )
    def test_mls_abbreviations(self, code, expected):
        assert normalize_status(code) == expected

    def test_api_aliases_are_case_insensitive(self):
        assert normalize_status("under_contract") == StandardStatus.ACTIVE_UNDER_CONTRACT
        assert normalize_status("SOLD") == StandardStatus.CLOSED
        assert normalize_status("canceled") == StandardStatus.CANCELLED

    def test_enum_passes_through(self):
        assert normalize_status(StandardStatus.EXPIRED) is StandardStatus.EXPIRED

    @pytest.mark.parametrize("raw", [None, "", "   ", "Coming Soon"])
    def test_unrecognized_values(self, raw):
        assert normalize_status(raw) is None


def test_status_helpers():
    assert is_active_status("Active")
    assert is_active_status("AU")
    assert not is_active_status("Pending")

    assert is_closed_status("sold")
    assert not is_closed_status("Active")

    assert is_under_contract_status("Pending")
    assert is_under_contract_status("Active Under Contract")
    assert not is_under_contract_status("Closed")
