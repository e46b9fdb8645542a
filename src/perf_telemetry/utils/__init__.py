"""
Utilities - Timer/counter tables and rounding helpers.
"""

from perf_telemetry.utils.rounding import round_half_up, round_int, to_mb
from perf_telemetry.utils.tables import CounterTable, TimerTable

__all__ = ["CounterTable", "TimerTable", "round_half_up", "round_int", "to_mb"]
