"""
Micro-benchmark harness.

Provides calibration, measurement and reporting capabilities.
"""

from .runner import (
    BenchmarkResult,
    Harness,
    HarnessConfig,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
    format_nanos,
)

__all__ = [
    # Runner
    "BenchmarkResult",
    "Harness",
    "HarnessConfig",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "JSONReporter",
    "format_nanos",
]
