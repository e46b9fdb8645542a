"""
Configuration Package - Models and Loaders.

    - MonitorConfig: Pydantic model, immutable after construction
    - ConfigLoader: YAML loader with profile overlays

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - camelCase keys accepted alongside snake_case
"""

from perf_telemetry.config.loader import ConfigLoader, load_config
from perf_telemetry.config.models import MonitorConfig

__all__ = ["ConfigLoader", "MonitorConfig", "load_config"]
