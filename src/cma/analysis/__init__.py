"""
CMA Analysis

Statistics aggregation, the statistics cache and the price timeline.
"""
from src.cma.analysis.statistics import (
    METRIC_NAMES,
    StatisticsAggregator,
    calculate_statistics,
    median,
    summarize,
)
from src.cma.analysis.cache import StatisticsCache, get_redis_client, make_cache_key
from src.cma.analysis.timeline import TimelineExtractor, build_timeline

__all__ = [
    "METRIC_NAMES",
    "StatisticsAggregator",
    "calculate_statistics",
    "median",
    "summarize",
    "StatisticsCache",
    "get_redis_client",
    "make_cache_key",
    "TimelineExtractor",
    "build_timeline",
]
