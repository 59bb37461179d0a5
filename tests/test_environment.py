"""Tests for calibrating the timing environment."""

from bench_and_plot.environment import clock_cost, measure_environment


def test_measure_environment_is_positive() -> None:
    env = measure_environment(rounds=500)
    assert env.clock_resolution > 0
    assert env.clock_cost >= 0


def test_clock_cost_is_small() -> None:
    assert 0 <= clock_cost(1000) < 0.01
