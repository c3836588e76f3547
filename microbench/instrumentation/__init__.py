"""
Instrumentation module for micro-benchmarking.

Provides the millisecond clock and tight-loop timing utilities.
"""

from .timing import (
    Clock,
    NULL_WORKLOAD,
    Timer,
    Workload,
    monotonic_ms,
    repeat,
    time_repeated,
    timed,
)

__all__ = [
    "Clock",
    "NULL_WORKLOAD",
    "Timer",
    "Workload",
    "monotonic_ms",
    "repeat",
    "time_repeated",
    "timed",
]
