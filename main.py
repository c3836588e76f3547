#!/usr/bin/env python3
"""
microbench - Main entry point for running micro-benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    list    - List the built-in workloads
    run     - Benchmark built-in workloads
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from microbench.harness import (
    ChartReporter,
    ConsoleReporter,
    Harness,
    HarnessConfig,
    JSONReporter,
)
from microbench.workloads import ALL_WORKLOADS, get_workload


def list_workloads_command(args) -> None:
    """Print the built-in workload catalog."""
    width = max(len(w.name) for w in ALL_WORKLOADS)
    for workload in ALL_WORKLOADS:
        print(f"{workload.name:<{width}}  [{workload.category}] {workload.description}")


def resolve_config(args) -> HarnessConfig:
    """Environment provides defaults, command line flags override them."""
    config = HarnessConfig.from_env()
    return HarnessConfig(
        measure_rounds=args.rounds if args.rounds is not None else config.measure_rounds,
        minimum_duration_ms=(
            args.min_duration_ms if args.min_duration_ms is not None
            else config.minimum_duration_ms
        ),
        max_repeats=args.max_repeats if args.max_repeats is not None else config.max_repeats,
    )


def run_command(args) -> None:
    """Benchmark the selected workloads and report."""
    config = resolve_config(args)
    definitions = [get_workload(name) for name in args.workloads] if args.workloads else ALL_WORKLOADS

    print("=" * 70)
    print("MICROBENCH")
    print("=" * 70)
    print(f"Measurement rounds: {config.measure_rounds}")
    print(f"Minimum duration: {config.minimum_duration_ms}ms")
    if config.max_repeats is not None:
        print(f"Max repeats: {config.max_repeats}")

    harness = Harness(config, verbose=not args.quiet)
    harness.run_all((definition.name, definition.build()) for definition in definitions)

    reporter = ConsoleReporter(use_color=not args.no_color)
    print()
    print(reporter.results_table(harness.results, config.measure_rounds))
    if args.raw:
        print()
        print(reporter.raw_data(harness.results))

    if args.json:
        path = JSONReporter(args.output_dir).save_results(harness.results, config)
        print(f"\nSaved results to {path}")
    if args.charts:
        path = ChartReporter(args.output_dir / "charts").median_bar_chart(harness.results)
        if path:
            print(f"Saved chart to {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="microbench - Self-calibrating micro-benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py list
    python main.py run --workloads noop list_sort
    python main.py run --rounds 9 --min-duration-ms 200 --raw
    python main.py run --json --charts --output-dir results
        """,
    )

    parser.add_argument(
        "command",
        choices=["list", "run"],
        help="Command to run",
    )
    parser.add_argument(
        "--workloads",
        nargs="+",
        metavar="NAME",
        help="Workloads to benchmark (default: all)",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Measurement rounds per workload (default: MICROBENCH_MEASURE_ROUNDS or 5)",
    )
    parser.add_argument(
        "--min-duration-ms",
        type=int,
        default=None,
        help="Calibration target in ms (default: MICROBENCH_MIN_DURATION_MS or 500)",
    )
    parser.add_argument(
        "--max-repeats",
        type=int,
        default=None,
        help="Upper bound on the calibrated repeat count (default: unbounded)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Also print raw round durations",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Save results as JSON",
    )
    parser.add_argument(
        "--charts",
        action="store_true",
        help="Save a median bar chart (requires matplotlib)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("results"),
        help="Directory to save results (default: results/)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the final report",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)

    commands = {
        "list": list_workloads_command,
        "run": run_command,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)
    except KeyError as e:
        print(f"\nError: {e.args[0]}")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
