"""Shared fixtures for the bench_and_plot test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from bench_and_plot.config import Configuration  # noqa: E402
from bench_and_plot.environment import Environment  # noqa: E402


@pytest.fixture
def fast_config() -> Configuration:
    """A configuration small enough to run real benchmarks in a test."""
    return Configuration(sample_count=5, resample_count=200, confidence_interval=0.9)


@pytest.fixture
def environment() -> Environment:
    return Environment(clock_resolution=1e-7, clock_cost=0.0)
