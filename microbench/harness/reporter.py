"""
Results presentation for micro-benchmark results.

Provides CLI tables, raw data dumps, JSON export and charts.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .runner import BenchmarkResult, HarnessConfig


def format_nanos(value: float) -> str:
    """Format a nanosecond estimate with two decimals."""
    return f"{value:.2f}"


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def _nanos(self, value: float, width: int = 0) -> str:
        text = f"{format_nanos(value):>{width}}"
        # Negative estimates mean the noise floor exceeded the workload cost
        return self._color(text, "red") if value < 0 else text

    def results_table(self, results: Sequence[BenchmarkResult], measure_rounds: int) -> str:
        """Generate the aligned results table."""
        lines = [self._color(f"Benchmark results ({measure_rounds} measurement rounds)", "bold")]
        if not results:
            return "\n".join(lines)

        index_width = len(str(len(results)))
        desc_width = max(len(r.description) for r in results)
        nanos_width = max(
            len(format_nanos(v))
            for r in results
            for v in (r.median_nanos, r.min_nanos, r.max_nanos)
        )

        for i, result in enumerate(results, start=1):
            lines.append(
                f"{i:>{index_width}}: {result.description:<{desc_width}}"
                f"    {self._nanos(result.median_nanos, nanos_width)} ns"
                f"    (min {self._nanos(result.min_nanos, nanos_width)} ns,"
                f" max {self._nanos(result.max_nanos, nanos_width)} ns)"
            )
        return "\n".join(lines)

    def raw_data(self, results: Sequence[BenchmarkResult]) -> str:
        """Dump every result with its corrected round durations."""
        lines = [self._color("Raw benchmark data", "bold")]
        for i, result in enumerate(results, start=1):
            lines.append(f"{i}: {result}")
        return "\n".join(lines)

    def single_result(self, result: BenchmarkResult) -> str:
        """Generate report for a single benchmark result."""
        lines = []
        lines.append(self._color(f"\n{'=' * 60}", "blue"))
        lines.append(self._color(f"Benchmark: {result.description}", "bold"))
        lines.append(self._color(f"{'=' * 60}", "blue"))

        lines.append(f"\nCalibration:")
        lines.append(f"  Repeats: {result.repeats}")
        lines.append(f"  Noise: {result.noise_ms}ms")

        lines.append(f"\nPer-iteration Time:")
        lines.append(f"  {'Median:':<8} {self._nanos(result.median_nanos)} ns")
        lines.append(f"  {'Min:':<8} {self._nanos(result.min_nanos)} ns")
        lines.append(f"  {'Max:':<8} {self._nanos(result.max_nanos)} ns")

        rounds = ", ".join(f"{ms}ms" for ms in result.durations_ms)
        lines.append(f"\nRounds: {rounds}")

        return "\n".join(lines)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")
        self._matplotlib_available = False
        self._check_matplotlib()

    def _check_matplotlib(self):
        """Check if matplotlib is available."""
        try:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend
            self._matplotlib_available = True
        except ImportError:
            self._matplotlib_available = False

    def median_bar_chart(
        self,
        results: Sequence[BenchmarkResult],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Bar chart of per-iteration medians with min/max whiskers."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts")
            return None

        import matplotlib.pyplot as plt
        import numpy as np

        if not results:
            return None

        names = [r.description for r in results]
        medians = np.array([r.median_nanos for r in results])
        lower = medians - np.array([r.min_nanos for r in results])
        upper = np.array([r.max_nanos for r in results]) - medians

        x = np.arange(len(names))

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(x, medians, yerr=[lower, upper], capsize=4, color="steelblue")

        ax.set_xlabel("Benchmark")
        ax.set_ylabel("Time per iteration (ns)")
        ax.set_title("Benchmark Medians")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filename = filename or "median_bar_chart.png"
        filepath = self.output_dir / filename
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath


class JSONReporter:
    """Exports results as JSON for further analysis."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results")

    def save_results(
        self,
        results: Sequence[BenchmarkResult],
        config: Optional[HarnessConfig] = None,
        name: str = "benchmark",
    ) -> Path:
        """Save results as one timestamped JSON document."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        # Microseconds keep saves within the same second apart
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        filename = f"{name}_{timestamp}.json"
        filepath = self.output_dir / filename

        data = {
            "name": name,
            "timestamp": timestamp,
            "config": config.to_dict() if config else None,
            "results": [r.to_dict() for r in results],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def load_result(self, filepath: Path) -> dict:
        """Load a result document from JSON."""
        with open(filepath) as f:
            return json.load(f)

    def load_all_results(self, pattern: str = "*.json") -> list[dict]:
        """Load all result documents matching a pattern."""
        results = []
        for filepath in sorted(self.output_dir.glob(pattern)):
            results.append(self.load_result(filepath))
        return results
