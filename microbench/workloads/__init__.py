"""
Built-in workload definitions for micro-benchmarking.
"""

from .definitions import (
    WorkloadDefinition,
    ALL_WORKLOADS,
    BASELINE_WORKLOADS,
    ARITHMETIC_WORKLOADS,
    COLLECTION_WORKLOADS,
    CONTROL_FLOW_WORKLOADS,
    BLOCKING_WORKLOADS,
    get_workload,
    get_workloads_by_category,
    list_workloads,
)

__all__ = [
    "WorkloadDefinition",
    "ALL_WORKLOADS",
    "BASELINE_WORKLOADS",
    "ARITHMETIC_WORKLOADS",
    "COLLECTION_WORKLOADS",
    "CONTROL_FLOW_WORKLOADS",
    "BLOCKING_WORKLOADS",
    "get_workload",
    "get_workloads_by_category",
    "list_workloads",
]
