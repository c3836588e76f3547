"""
Built-in workload definitions for micro-benchmarking.

Defines small, repeatable workloads that cover common costs:
1. Baseline (no-op and trivial calls)
2. Arithmetic
3. Collections (sorting, lookups, string building)
4. Control flow (raising and catching exceptions)
5. Blocking (sleep)
"""

import time
from dataclasses import dataclass, field
from typing import Callable

from ..instrumentation.timing import Workload


@dataclass
class WorkloadDefinition:
    """Definition of a benchmarkable workload."""

    name: str
    description: str
    category: str
    # Builds a fresh zero-argument callable; state is created once per build
    factory: Callable[[], Workload]
    metadata: dict = field(default_factory=dict)

    def build(self) -> Workload:
        """Create the zero-argument callable to benchmark."""
        return self.factory()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "metadata": self.metadata,
        }


def _noop() -> Workload:
    def workload():
        pass
    return workload


def _int_arithmetic() -> Workload:
    def workload():
        return (12345 * 6789 + 42) // 7 % 1000
    return workload


def _float_arithmetic() -> Workload:
    def workload():
        return (1.5 * 2.25 + 3.125) / 0.75
    return workload


def _list_sort() -> Workload:
    data = [(i * 7919) % 1000 for i in range(1000)]

    def workload():
        return sorted(data)
    return workload


def _dict_lookup() -> Workload:
    table = {f"key{i}": i for i in range(1000)}

    def workload():
        return table["key500"]
    return workload


def _string_join() -> Workload:
    parts = [str(i) for i in range(100)]

    def workload():
        return ",".join(parts)
    return workload


def _raise_and_catch() -> Workload:
    def workload():
        try:
            raise ValueError("benchmark")
        except ValueError as e:
            return e
    return workload


def _sleep_1ms() -> Workload:
    def workload():
        time.sleep(0.001)
    return workload


# ============================================================================
# Category 1: Baseline
# ============================================================================

BASELINE_WORKLOADS = [
    WorkloadDefinition(
        name="noop",
        description="Empty function call",
        category="baseline",
        factory=_noop,
    ),
]

# ============================================================================
# Category 2: Arithmetic
# ============================================================================

ARITHMETIC_WORKLOADS = [
    WorkloadDefinition(
        name="int_arithmetic",
        description="Integer multiply, floor-divide and modulo",
        category="arithmetic",
        factory=_int_arithmetic,
    ),
    WorkloadDefinition(
        name="float_arithmetic",
        description="Float multiply, add and divide",
        category="arithmetic",
        factory=_float_arithmetic,
    ),
]

# ============================================================================
# Category 3: Collections
# ============================================================================

COLLECTION_WORKLOADS = [
    WorkloadDefinition(
        name="list_sort",
        description="Sort a 1000 element list",
        category="collections",
        factory=_list_sort,
        metadata={"size": 1000},
    ),
    WorkloadDefinition(
        name="dict_lookup",
        description="String key lookup in a 1000 entry dict",
        category="collections",
        factory=_dict_lookup,
        metadata={"size": 1000},
    ),
    WorkloadDefinition(
        name="string_join",
        description="Join 100 short strings",
        category="collections",
        factory=_string_join,
        metadata={"size": 100},
    ),
]

# ============================================================================
# Category 4: Control flow
# ============================================================================

CONTROL_FLOW_WORKLOADS = [
    WorkloadDefinition(
        name="raise_and_catch",
        description="Raise and catch a ValueError",
        category="control_flow",
        factory=_raise_and_catch,
    ),
]

# ============================================================================
# Category 5: Blocking
# ============================================================================

BLOCKING_WORKLOADS = [
    WorkloadDefinition(
        name="sleep_1ms",
        description="Sleep for one millisecond",
        category="blocking",
        factory=_sleep_1ms,
    ),
]

ALL_WORKLOADS = (
    BASELINE_WORKLOADS
    + ARITHMETIC_WORKLOADS
    + COLLECTION_WORKLOADS
    + CONTROL_FLOW_WORKLOADS
    + BLOCKING_WORKLOADS
)

_WORKLOADS_BY_NAME = {w.name: w for w in ALL_WORKLOADS}


def get_workload(name: str) -> WorkloadDefinition:
    """Get a workload by name."""
    if name not in _WORKLOADS_BY_NAME:
        raise KeyError(f"Unknown workload: {name}. Available: {list(_WORKLOADS_BY_NAME)}")
    return _WORKLOADS_BY_NAME[name]


def get_workloads_by_category(category: str) -> list[WorkloadDefinition]:
    """Get all workloads in a category."""
    return [w for w in ALL_WORKLOADS if w.category == category]


def list_workloads() -> list[str]:
    """List all workload names."""
    return [w.name for w in ALL_WORKLOADS]
