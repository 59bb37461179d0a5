"""Run benchmarks from the command line, with bootstrapped statistics and plots."""

__version__ = "0.1.0"

from .benchmarks import B, Benchmark, BenchGroup, bench, bgroup  # noqa: E402
from .config import DEFAULT_CONFIG, Configuration  # noqa: E402
from .main import default_main, default_main_with, parse_args  # noqa: E402
from .options import DEFAULT_OPTIONS  # noqa: E402

__all__ = [
    "B",
    "Benchmark",
    "BenchGroup",
    "bench",
    "bgroup",
    "Configuration",
    "DEFAULT_CONFIG",
    "DEFAULT_OPTIONS",
    "default_main",
    "default_main_with",
    "parse_args",
]
