"""Benchmark configurations and predefined suites."""

from __future__ import annotations

from dataclasses import asdict, dataclass

OPERATIONS = ("arange", "random", "reshape", "add", "mul", "matmul")


@dataclass
class BenchmarkConfig:
    """
    One timed operation at one size.

    ``size`` is the arange length for ``arange`` and ``reshape``, the square
    side for ``random``/``add``/``mul``, and ``(m, k, n)`` for ``matmul``.
    """

    operation: str
    dtype: str = "float64"
    size: tuple = (1000,)
    n_warmup: int = 1
    n_runs: int = 5
    random_seed: int = 2

    def __post_init__(self):
        if self.operation not in OPERATIONS:
            raise ValueError(f"Unknown operation {self.operation!r}, expected one of {OPERATIONS}")

    @property
    def name(self) -> str:
        return f"{self.operation}_{self.dtype}_{'x'.join(str(s) for s in self.size)}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def _suite(dtype: str, arange_len: int, side: int, reshape_len: int, mk_n: tuple) -> list:
    return [
        BenchmarkConfig("arange", dtype, (arange_len,)),
        BenchmarkConfig("random", dtype, (side, side)),
        BenchmarkConfig("reshape", dtype, (reshape_len,)),
        BenchmarkConfig("add", dtype, (side, side)),
        BenchmarkConfig("mul", dtype, (side, side)),
        BenchmarkConfig("matmul", dtype, mk_n),
    ]


BENCHMARK_SUITES: dict[str, list[BenchmarkConfig]] = {
    "default": (
        _suite("float32", 100000, 1000, 10000, (200, 300, 200))
        + _suite("float64", 100000, 1000, 10000, (200, 300, 200))
    ),
    "float32": _suite("float32", 100000, 1000, 10000, (200, 300, 200)),
    "float64": _suite("float64", 100000, 1000, 10000, (200, 300, 200)),
    "small": (
        _suite("float32", 1000, 20, 100, (4, 6, 4))
        + _suite("float64", 1000, 20, 100, (4, 6, 4))
    ),
}
