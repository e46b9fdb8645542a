"""
Store Package - Bounded metric retention.
"""

from perf_telemetry.store.metric_store import MetricStore, StoreStats

__all__ = ["MetricStore", "StoreStats"]
