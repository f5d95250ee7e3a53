"""
Tests for the statistics aggregator.
"""
from decimal import Decimal

import pytest

from src.cma.analysis.statistics import (
    METRIC_NAMES,
    StatisticsAggregator,
    calculate_statistics,
    median,
    summarize,
)
from src.cma.errors import NoPropertiesFoundError
from src.cma.models.property_record import PropertyRecord
from src.cma.models.results import StatMetricSummary
from src.cma.store.memory import InMemoryPropertyStore


class TestSummaries:
    """Tests for median and summarize."""

    def test_even_median_averages_middle_pair(self):
        values = [Decimal(v) for v in (100000, 200000, 300000, 400000)]
        assert median(values) == Decimal("250000")

    def test_odd_median_takes_middle(self):
        assert median([Decimal(1), Decimal(5), Decimal(9)]) == Decimal(5)

    def test_summarize_sorts_input(self):
        summary = summarize([Decimal(400000), Decimal(100000), Decimal(300000), Decimal(200000)])
        assert summary.range.min == Decimal(100000)
        assert summary.range.max == Decimal(400000)
        assert summary.average == Decimal(250000)
        assert summary.median == Decimal(250000)

    def test_single_value(self):
        summary = summarize([Decimal(325000)])
        assert summary.range.min == summary.range.max == Decimal(325000)
        assert summary.average == summary.median == Decimal(325000)

    def test_empty_metric_is_all_zero(self):
        summary = summarize([])
        assert summary == StatMetricSummary.empty()
        assert summary.range.min == summary.range.max == summary.average == summary.median == 0


class TestCalculateStatistics:
    """Tests for calculate_statistics."""

    def test_price_uses_close_price_for_closed(self):
        records = [
            PropertyRecord(id="1", standard_status="Closed", list_price=520000, close_price=500000),
            PropertyRecord(id="2", standard_status="Active", list_price=300000),
        ]
        result = calculate_statistics(records)
        assert result.price.range.min == Decimal(300000)
        assert result.price.range.max == Decimal(500000)
        assert result.price.average == Decimal(400000)

    def test_zero_living_area_skips_price_per_sq_ft_only(self):
        records = [
            PropertyRecord(id="1", list_price=400000, living_area=2000, bedrooms_total=3),
            PropertyRecord(id="2", list_price=600000, living_area=0, bedrooms_total=4),
        ]
        result = calculate_statistics(records)
        assert result.price.average == Decimal(500000)
        assert result.bedrooms.average == Decimal("3.5")
        assert result.price_per_sq_ft.range.min == result.price_per_sq_ft.range.max == Decimal(200)
        assert result.living_area.median == Decimal(2000)

    def test_fallback_fields(self):
        records = [
            PropertyRecord(id="1", days_on_market=10, bathrooms_total_integer=3, lot_size_acres="0.25"),
            PropertyRecord(id="2", cumulative_days_on_market=30, bathrooms_full=2, lot_size_square_feet=43560),
        ]
        result = calculate_statistics(records)
        assert result.days_on_market.median == Decimal(20)
        assert result.bathrooms.range.min == Decimal(2)
        assert result.bathrooms.range.max == Decimal(3)
        assert result.acres.range.max == Decimal(1)
        assert result.lot_size.average == Decimal(43560)

    def test_metric_without_data_is_zeroed(self):
        result = calculate_statistics([PropertyRecord(id="1", list_price=250000)])
        assert result.year_built == StatMetricSummary.empty()

    def test_empty_input_raises(self):
        with pytest.raises(NoPropertiesFoundError):
            calculate_statistics([])

    def test_every_metric_is_present(self):
        result = calculate_statistics([PropertyRecord(id="1", list_price=1)])
        assert set(result.model_dump().keys()) == set(METRIC_NAMES)

    def test_json_uses_camel_case_numbers(self):
        result = calculate_statistics([PropertyRecord(id="1", list_price=250000)])
        payload = result.model_dump(mode="json", by_alias=True)
        assert payload["pricePerSqFt"]["average"] == 0.0
        assert payload["price"]["range"]["max"] == 250000.0


class TestStatisticsAggregator:
    """Tests for StatisticsAggregator."""

    @pytest.fixture
    def store(self):
        return InMemoryPropertyStore([
            PropertyRecord(id="a", list_price=100000),
            PropertyRecord(id="b", list_price=200000),
            PropertyRecord(id="c", list_price=300000),
            PropertyRecord(id="d", list_price=400000),
            PropertyRecord(id="hidden", list_price=9000000, mlg_can_view=False),
            PropertyRecord(id="lease", list_price=2200),
        ])

    def test_aggregate_median(self, store):
        result = StatisticsAggregator(store).aggregate(["a", "b", "c", "d"])
        assert result.price.median == Decimal(250000)

    def test_unknown_and_hidden_ids_are_skipped(self, store):
        result = StatisticsAggregator(store).aggregate(["a", "hidden", "missing", "a"])
        assert result.price.range.max == Decimal(100000)

    def test_no_resolvable_ids_raises(self, store):
        with pytest.raises(NoPropertiesFoundError) as exc_info:
            StatisticsAggregator(store).aggregate(["missing", "hidden"])
        assert exc_info.value.property_ids == ["hidden", "missing"]

    def test_exclude_rentals(self, store):
        aggregator = StatisticsAggregator(store, exclude_rental_listings=True)
        result = aggregator.aggregate(["a", "lease"])
        assert result.price.range.min == Decimal(100000)

        with pytest.raises(NoPropertiesFoundError):
            aggregator.aggregate(["lease"])

    def test_calculate_skips_hidden_records(self):
        aggregator = StatisticsAggregator(InMemoryPropertyStore())
        records = [
            PropertyRecord(id="a", list_price=100000),
            PropertyRecord(id="b", list_price=900000, mlg_can_view=False),
        ]
        assert aggregator.calculate(records).price.range.max == Decimal(100000)

    def test_results_are_fresh_without_cache(self, store):
        aggregator = StatisticsAggregator(store)
        first = aggregator.aggregate(["a", "b"])

        store.upsert(PropertyRecord(id="b", list_price=500000))
        second = aggregator.aggregate(["a", "b"])

        assert first.price.range.max == Decimal(200000)
        assert second.price.range.max == Decimal(500000)
