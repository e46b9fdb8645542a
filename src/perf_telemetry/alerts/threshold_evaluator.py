"""
Threshold Evaluator - Breach Detection for Memory and Frame Rate.

Pure functions of the latest sample and the configured thresholds. Each
breaching sample produces exactly one Advisory; there is no suppression of
repeats, no hysteresis and no cooldown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from perf_telemetry.domain.records import (
    Advisory,
    AdvisoryKind,
    FpsSample,
    MemorySample,
)

HIGH_MEMORY = "high-memory"
LOW_FPS = "low-fps"


@dataclass(frozen=True)
class Thresholds:
    """Breach thresholds."""
    memory_ratio: float = 0.8  # used / limit above this breaches
    fps: int = 30  # frame rate below this breaches


class ThresholdEvaluator:
    """Turns breaching samples into advisories."""

    def __init__(self, thresholds: Optional[Thresholds] = None) -> None:
        self.thresholds = thresholds or Thresholds()

    def evaluate_memory(self, sample: MemorySample) -> Optional[Advisory]:
        """
        Check heap usage against the memory ratio threshold.

        A sample with an unknown (zero) limit never breaches.

        Returns:
            cleanup-suggested advisory on breach, else None
        """
        if sample.limit <= 0:
            return None
        ratio = sample.usage_ratio
        if ratio <= self.thresholds.memory_ratio:
            return None
        return Advisory(
            kind=AdvisoryKind.CLEANUP_SUGGESTED,
            reason=HIGH_MEMORY,
            value=ratio,
            threshold=self.thresholds.memory_ratio,
            timestamp=sample.timestamp,
        )

    def evaluate_fps(self, sample: FpsSample) -> Optional[Advisory]:
        """
        Check a frame-rate sample against the fps threshold.

        Returns:
            optimization-suggested advisory on breach, else None
        """
        if sample.value >= self.thresholds.fps:
            return None
        return Advisory(
            kind=AdvisoryKind.OPTIMIZATION_SUGGESTED,
            reason=LOW_FPS,
            value=float(sample.value),
            threshold=float(self.thresholds.fps),
            timestamp=sample.timestamp,
        )

    def evaluate(self, record: object) -> Optional[Advisory]:
        """Dispatch on record type; other record kinds never breach."""
        if isinstance(record, MemorySample):
            return self.evaluate_memory(record)
        if isinstance(record, FpsSample):
            return self.evaluate_fps(record)
        return None
