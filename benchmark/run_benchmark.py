"""CLI entry point for timing ndstride operations."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pandas as pd

from benchmark.config import BENCHMARK_SUITES, OPERATIONS, BenchmarkConfig
from benchmark.runner import BenchmarkRunner, TimingResult

logger = logging.getLogger(__name__)


def run_benchmark_suite(configs: list[BenchmarkConfig]) -> list[TimingResult]:
    """Run a suite of benchmark configurations."""
    runner = BenchmarkRunner()

    results = []
    for i, config in enumerate(configs):
        logger.info("Benchmark %d/%d: %s (%d runs)", i + 1, len(configs), config.name, config.n_runs)
        result = runner.run(config)
        if result.success:
            logger.info("  %.6fs (std: %.6fs)", result.mean_time, result.std_time)
        else:
            logger.error("  FAILED - %s", result.error)
        results.append(result)

    return results


def save_csv(results: list[TimingResult], output_dir: str, suite_name: str) -> Path:
    """Write one row per result, without the raw per-run times."""
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    filename = path / f"{suite_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"

    frame = pd.DataFrame([r.to_dict() for r in results]).drop(columns=["times"])
    frame.to_csv(filename, index=False)
    return filename


def main(argv=None):
    """Run benchmark CLI."""
    parser = argparse.ArgumentParser(
        description="Time ndstride array operations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--suite",
        type=str,
        default="default",
        choices=list(BENCHMARK_SUITES.keys()),
        help="Predefined benchmark suite to run",
    )
    parser.add_argument(
        "--operation",
        type=str,
        choices=list(OPERATIONS),
        help="Only run configurations for this operation",
    )
    parser.add_argument("--warmup", type=int, default=1, help="Number of warmup runs")
    parser.add_argument("--runs", type=int, default=5, help="Number of timed runs")
    parser.add_argument("--seed", type=int, default=2, help="Random seed")
    parser.add_argument("--output-dir", type=str, default=None, help="Write a CSV summary here")
    parser.add_argument("--quiet", action="store_true", help="Suppress verbose output")

    args = parser.parse_args(argv)

    log_level = logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )

    configs = [
        replace(c, n_warmup=args.warmup, n_runs=args.runs, random_seed=args.seed)
        for c in BENCHMARK_SUITES[args.suite]
        if args.operation is None or c.operation == args.operation
    ]

    logger.info("Running benchmark suite: %s", args.suite)
    logger.info("Number of configurations: %d", len(configs))

    results = run_benchmark_suite(configs)

    if args.output_dir:
        csv_path = save_csv(results, args.output_dir, args.suite)
        logger.info("Results saved to: %s", csv_path)

    logger.info("Summary:")
    for r in results:
        status = "OK" if r.success else "FAILED"
        logger.info("  %-28s %.6fs [%s]", r.name, r.mean_time, status)

    return results


if __name__ == "__main__":
    main()
