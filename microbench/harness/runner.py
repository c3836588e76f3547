"""
Benchmark orchestrator for micro-benchmarks.

Calibrates how many times a workload must be repeated to outlast the
clock resolution, takes several timed rounds of the workload and of a
no-op baseline at that repeat count, and folds both into a result with
the baseline overhead removed.
"""

import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Union

from ..instrumentation.timing import (
    NULL_WORKLOAD,
    Clock,
    Workload,
    monotonic_ms,
    time_repeated,
)

MILLIS_TO_NANOS = 1000 * 1000


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class HarnessConfig:
    """Configuration for a benchmark harness, fixed once built."""

    measure_rounds: int = 5
    minimum_duration_ms: int = 500
    # Optional calibration ceiling; None keeps doubling until the minimum is met
    max_repeats: Optional[int] = None

    def __post_init__(self):
        if self.measure_rounds < 1:
            raise ValueError(f"measure_rounds must be >= 1, got {self.measure_rounds}")
        if self.minimum_duration_ms < 1:
            raise ValueError(
                f"minimum_duration_ms must be >= 1, got {self.minimum_duration_ms}"
            )
        if self.max_repeats is not None and self.max_repeats < 1:
            raise ValueError(f"max_repeats must be >= 1, got {self.max_repeats}")

    @classmethod
    def from_env(cls) -> "HarnessConfig":
        """Build a config from MICROBENCH_* environment variables."""
        defaults = cls()
        return cls(
            measure_rounds=_env_int("MICROBENCH_MEASURE_ROUNDS", defaults.measure_rounds),
            minimum_duration_ms=_env_int(
                "MICROBENCH_MIN_DURATION_MS", defaults.minimum_duration_ms
            ),
            max_repeats=_env_int("MICROBENCH_MAX_REPEATS", defaults.max_repeats),
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "measure_rounds": self.measure_rounds,
            "minimum_duration_ms": self.minimum_duration_ms,
            "max_repeats": self.max_repeats,
        }


@dataclass(frozen=True)
class BenchmarkResult:
    """Noise-corrected timings of one benchmarked workload.

    ``durations_ms`` holds the sorted round durations (each covering
    ``repeats`` invocations) with ``noise_ms`` already subtracted. Values
    may be negative when a round beat the fastest no-op round.
    """

    description: str
    repeats: int
    durations_ms: tuple[int, ...]
    noise_ms: int

    @classmethod
    def from_measurements(
        cls,
        description: str,
        repeats: int,
        durations_ms: Sequence[int],
        noise_ms: Sequence[int],
    ) -> "BenchmarkResult":
        """Build a result from raw workload and no-op round durations."""
        noise_floor = sorted(noise_ms)[0]
        corrected = tuple(d - noise_floor for d in sorted(durations_ms))
        return cls(
            description=description,
            repeats=repeats,
            durations_ms=corrected,
            noise_ms=noise_floor,
        )

    @property
    def median_ms(self) -> int:
        # Upper middle element for an even number of rounds
        return self.durations_ms[len(self.durations_ms) // 2]

    @property
    def min_ms(self) -> int:
        return self.durations_ms[0]

    @property
    def max_ms(self) -> int:
        return self.durations_ms[-1]

    def to_nanos(self, millis: float) -> float:
        """Convert a round duration to estimated nanoseconds per invocation."""
        return millis * (MILLIS_TO_NANOS / self.repeats)

    @property
    def median_nanos(self) -> float:
        return self.to_nanos(self.median_ms)

    @property
    def min_nanos(self) -> float:
        return self.to_nanos(self.min_ms)

    @property
    def max_nanos(self) -> float:
        return self.to_nanos(self.max_ms)

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "description": self.description,
            "repeats": self.repeats,
            "durations_ms": list(self.durations_ms),
            "noise_ms": self.noise_ms,
            "median_nanos": self.median_nanos,
            "min_nanos": self.min_nanos,
            "max_nanos": self.max_nanos,
        }

    def __str__(self) -> str:
        measurements = ", ".join(f"{ms} ms" for ms in self.durations_ms)
        return (
            f"BenchmarkResult[{self.description}: {self.median_nanos:.2f} ns "
            f"({self.repeats} repeats, measurements: {measurements}; "
            f"subtracted {self.noise_ms} ms measurement noise)]"
        )


class Harness:
    """Calibrates, measures and records micro-benchmarks.

    Not thread-safe; each thread should own its own harness.
    """

    def __init__(
        self,
        config: Optional[HarnessConfig] = None,
        clock: Optional[Clock] = None,
        verbose: bool = False,
    ):
        self.config = config or HarnessConfig()
        self.clock = clock or monotonic_ms
        self.verbose = verbose
        self._results: list[BenchmarkResult] = []

    @property
    def results(self) -> tuple[BenchmarkResult, ...]:
        """All completed results in call order."""
        return tuple(self._results)

    def calibrate(self, workload: Workload) -> int:
        """Find a repeat count whose run takes at least minimum_duration_ms.

        The count doubles from 1. Without ``max_repeats`` there is no upper
        bound: a workload whose cost does not grow with repetition keeps
        this loop running forever.
        """
        minimum_ms = self.config.minimum_duration_ms
        ceiling = self.config.max_repeats
        repeats = 1
        while True:
            elapsed_ms = time_repeated(workload, repeats, self.clock)
            if elapsed_ms >= minimum_ms:
                break
            if ceiling is not None and repeats >= ceiling:
                if self.verbose:
                    print(
                        f"  Calibration hit max_repeats={ceiling} "
                        f"at {elapsed_ms}ms (< {minimum_ms}ms)"
                    )
                break
            repeats *= 2
            if ceiling is not None:
                repeats = min(repeats, ceiling)

        if self.verbose:
            print(f"  Calibrated: {repeats} repeats ({elapsed_ms}ms)")
        return repeats

    def measure(self, workload: Workload, repeats: int, label: str = "Round") -> list[int]:
        """Take measure_rounds timings of ``repeats`` invocations each."""
        durations: list[int] = []
        rounds = self.config.measure_rounds
        for i in range(rounds):
            elapsed_ms = time_repeated(workload, repeats, self.clock)
            durations.append(elapsed_ms)
            if self.verbose:
                print(f"  {label} {i + 1}/{rounds}: {elapsed_ms}ms")
        return durations

    def run(self, description: str, workload: Workload) -> BenchmarkResult:
        """Benchmark a zero-argument workload and record the result.

        Exceptions raised by the workload propagate and nothing is recorded.
        """
        if self.verbose:
            print(f"\nRunning benchmark: {description}")

        repeats = self.calibrate(workload)
        durations = self.measure(workload, repeats)
        noise = self.measure(NULL_WORKLOAD, repeats, label="Noise")

        result = BenchmarkResult.from_measurements(description, repeats, durations, noise)
        self._results.append(result)

        if self.verbose:
            print(f"  Median: {result.median_nanos:.2f} ns "
                  f"(min {result.min_nanos:.2f} ns, max {result.max_nanos:.2f} ns)")
        return result

    def run_all(
        self,
        workloads: Union[Mapping[str, Workload], Iterable[tuple[str, Workload]]],
    ) -> list[BenchmarkResult]:
        """Run several workloads in order."""
        items = workloads.items() if isinstance(workloads, Mapping) else workloads
        return [self.run(description, workload) for description, workload in items]
