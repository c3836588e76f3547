"""
Timing utilities for micro-benchmarking.

Provides a millisecond clock, a simple timer, and helpers for timing a
workload repeated in a tight loop:
- monotonic_ms: default integer millisecond clock
- Timer / timed: manual and context-managed timing
- repeat / time_repeated: tight-loop execution of a workload
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

# Zero-argument callable returning the current time in whole milliseconds
Clock = Callable[[], int]

Workload = Callable[[], object]


def monotonic_ms() -> int:
    """Monotonic wall clock truncated to whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


def _null_workload() -> None:
    pass


# Shared no-op used for every noise measurement
NULL_WORKLOAD: Workload = _null_workload


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer", clock: Optional[Clock] = None):
        self.name = name
        self.clock = clock or monotonic_ms
        self.start_time: int = 0
        self.end_time: int = 0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = self.clock()
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = self.clock()
        self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ms(self) -> int:
        """Elapsed time in whole milliseconds."""
        end = self.end_time if not self._running else self.clock()
        return end - self.start_time


@contextmanager
def timed(name: str = "operation", clock: Optional[Clock] = None) -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("my_operation") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name, clock).start()
    try:
        yield timer
    finally:
        timer.stop()


def repeat(workload: Workload, repeats: int) -> None:
    """Invoke the workload ``repeats`` times back to back."""
    for _ in range(repeats):
        workload()


def time_repeated(workload: Workload, repeats: int, clock: Optional[Clock] = None) -> int:
    """Time ``repeats`` consecutive invocations of a workload, in milliseconds."""
    with timed("repeat", clock) as timer:
        repeat(workload, repeats)
    return timer.elapsed_ms
