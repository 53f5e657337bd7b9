"""Timing harness for ndstride operations."""

from __future__ import annotations

import gc
import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable

import numpy as np

import ndstride as nd
from benchmark.config import BenchmarkConfig


@dataclass
class TimingResult:
    """Container for timing results from a benchmark run."""

    name: str
    mean_time: float
    std_time: float
    min_time: float
    max_time: float
    times: list[float]
    success: bool
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


class BenchmarkRunner:
    """Builds operands for a config and times the operation on them."""

    @staticmethod
    def gc_collect() -> None:
        """Force garbage collection before timing."""
        gc.collect()

    @staticmethod
    def time_execution(func, *args, **kwargs) -> tuple[float, Any]:
        """Time a single function execution."""
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start
        return elapsed, result

    def build(self, config: BenchmarkConfig) -> Callable[[], Any]:
        """Return a zero-argument callable running the configured operation."""
        dtype = config.dtype
        seed = config.random_seed
        op = config.operation

        if op == "arange":
            (length,) = config.size
            return lambda: nd.arange(1.0, float(length), 1.0, dtype=dtype)

        if op == "random":
            return lambda: nd.random(config.size, seed=seed, dtype=dtype)

        if op == "reshape":
            (length,) = config.size
            side = math.isqrt(length)
            src = nd.arange(1.0, float(length + 1), 1.0, dtype=dtype)
            return lambda: nd.reshape_copy(src, (side, length // side))

        if op in ("add", "mul"):
            a = nd.random(config.size, seed=seed, dtype=dtype)
            b = nd.random(config.size, seed=seed + 1, dtype=dtype)
            fn = nd.add if op == "add" else nd.multiply
            return lambda: fn(a, b)

        m, k, n = config.size
        a = nd.random((m, k), seed=seed, dtype=dtype)
        b = nd.random((k, n), seed=seed + 1, dtype=dtype)
        return lambda: nd.matmul(a, b)

    def run(self, config: BenchmarkConfig) -> TimingResult:
        """Time one configuration with warmup and multiple runs."""
        try:
            run_fn = self.build(config)
            return self._run_timed_benchmark(config.name, run_fn, config.n_warmup, config.n_runs)
        except (ValueError, TypeError, RuntimeError) as e:
            return self._failed(config.name, e)

    def _run_timed_benchmark(
        self,
        name: str,
        run_fn: Callable[[], Any],
        n_warmup: int,
        n_runs: int,
    ) -> TimingResult:
        """Run a timed benchmark with warmup and multiple runs."""
        try:
            # The first warmup call also pays the numba compilation cost
            for _ in range(n_warmup):
                self.gc_collect()
                run_fn()

            times = []
            for _ in range(n_runs):
                self.gc_collect()
                elapsed, _ = self.time_execution(run_fn)
                times.append(elapsed)

            return TimingResult(
                name=name,
                mean_time=float(np.mean(times)),
                std_time=float(np.std(times)),
                min_time=float(np.min(times)),
                max_time=float(np.max(times)),
                times=times,
                success=True,
            )
        except (ValueError, TypeError, RuntimeError) as e:
            return self._failed(name, e)

    @staticmethod
    def _failed(name: str, error: Exception) -> TimingResult:
        return TimingResult(
            name=name,
            mean_time=float("nan"),
            std_time=float("nan"),
            min_time=float("nan"),
            max_time=float("nan"),
            times=[],
            success=False,
            error=str(error),
        )
