"""
Utility helpers for anxcloud.
"""

from .logging_config import (
    PerformanceMonitor,
    RedactingFilter,
    get_log_level,
    redact,
    setup_logging,
)

__all__ = [
    "PerformanceMonitor",
    "RedactingFilter",
    "get_log_level",
    "redact",
    "setup_logging",
]
