"""
microbench - A self-calibrating micro-benchmark harness.

Finds how many times a workload must run to be measured reliably,
removes timer overhead estimated from a no-op baseline, and reports
per-iteration timing statistics.

Key modules:
- harness: Calibration, measurement and reporting
- instrumentation: Millisecond clock and tight-loop timing utilities
- workloads: Built-in workloads for quick comparisons
"""

__version__ = "0.1.0"

from . import instrumentation
from . import harness
from . import workloads

from .harness import BenchmarkResult, Harness, HarnessConfig

__all__ = [
    "instrumentation",
    "harness",
    "workloads",
    "BenchmarkResult",
    "Harness",
    "HarnessConfig",
]
