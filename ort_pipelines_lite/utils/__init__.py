"""
Utilities and helper functions.

Provides:
- Logging configuration
- Per-stage timing counters
"""

from ort_pipelines_lite.utils.logging import get_logger, setup_logger
from ort_pipelines_lite.utils.timings import Timings, TimingStats

__all__ = ["Timings", "TimingStats", "get_logger", "setup_logger"]
