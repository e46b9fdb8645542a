"""
Rounding helpers.

Summaries and frame rates round half away from zero rather than using
Python's round-half-to-even, so 24.5 fps reports as 25.
"""

from __future__ import annotations

import math

BYTES_PER_MB = 1024 * 1024


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to ``digits`` decimals, halves rounded up."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return int(math.floor(value + 0.5))


def to_mb(num_bytes: float) -> int:
    """Bytes to whole megabytes."""
    return round_int(num_bytes / BYTES_PER_MB)
