"""
Summary Package - Windowed statistical summaries.
"""

from perf_telemetry.summary.summarizer import DEFAULT_WINDOW_MS, Summarizer

__all__ = ["DEFAULT_WINDOW_MS", "Summarizer"]
