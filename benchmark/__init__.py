"""Timing suite for the ndstride array operations."""

from benchmark.config import BENCHMARK_SUITES, BenchmarkConfig
from benchmark.runner import BenchmarkRunner, TimingResult

__all__ = [
    "BENCHMARK_SUITES",
    "BenchmarkConfig",
    "BenchmarkRunner",
    "TimingResult",
]
