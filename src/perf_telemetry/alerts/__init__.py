"""
Alerts Package - Threshold evaluation and advisory delivery.

    - ThresholdEvaluator: memory / fps breach detection
    - AdvisoryDispatcher: typed outbound channels to the presentation layer
"""

from perf_telemetry.alerts.dispatcher import AdvisoryDispatcher
from perf_telemetry.alerts.threshold_evaluator import (
    HIGH_MEMORY,
    LOW_FPS,
    ThresholdEvaluator,
    Thresholds,
)

__all__ = [
    "AdvisoryDispatcher",
    "HIGH_MEMORY",
    "LOW_FPS",
    "ThresholdEvaluator",
    "Thresholds",
]
