"""This module contains the measurement and analysis of benchmarks."""

import gc
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from .analysis import Estimate, bootstrap, count_outliers, describe_duration, kernel_density
from .benchmarks import BenchmarkTree, iter_benchmarks
from .config import DEFAULT_CONFIG, Configuration, Plot, merge
from .environment import Environment
from .results import append_summary_row

logger = logging.getLogger(__name__)

# A batch of iterations must take at least this many clock ticks.
MIN_TICKS_PER_SAMPLE = 1000


@dataclass
class BenchmarkReport:
    name: str
    iterations: int
    times: np.ndarray
    mean: Estimate
    stddev: Estimate


def time_iterations(action: Callable[[], Any], iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        action()
    return time.perf_counter() - start


def run_benchmark(
    env: Environment, config: Configuration, action: Callable[[], Any]
) -> tuple[int, np.ndarray]:
    """
    Times an action, returning the iterations per sample and the seconds per
    iteration of each sample.
    """
    time_iterations(action, 1)

    min_time = env.clock_resolution * MIN_TICKS_PER_SAMPLE
    iterations = 1
    elapsed = time_iterations(action, iterations)
    while elapsed < min_time:
        iterations *= 2
        elapsed = time_iterations(action, iterations)

    sample_count = config.sample_count
    logger.info(
        f"collecting {sample_count} samples, {iterations} iterations each, "
        f"in estimated {describe_duration(sample_count * elapsed)}"
    )
    times = np.empty(sample_count)
    for i in range(sample_count):
        if config.perform_gc:
            gc.collect()
        times[i] = (time_iterations(action, iterations) - env.clock_cost) / iterations
    return iterations, times


def log_estimate(label: str, estimate: Estimate) -> None:
    logger.info(
        f"{label}: {describe_duration(estimate.point)}, "
        f"lb {describe_duration(estimate.lower_bound)}, "
        f"ub {describe_duration(estimate.upper_bound)}, "
        f"ci {estimate.confidence_level:.3f}"
    )


def log_outliers(times: np.ndarray) -> None:
    outliers = count_outliers(times)
    if outliers.total == 0:
        return
    percent = 100 * outliers.total / outliers.samples_seen
    logger.info(f"found {outliers.total} outliers among {outliers.samples_seen} samples ({percent:.1f}%)")
    for count, kind in (
        (outliers.low_severe, "low severe"),
        (outliers.low_mild, "low mild"),
        (outliers.high_mild, "high mild"),
        (outliers.high_severe, "high severe"),
    ):
        if count:
            logger.debug(f"  {count} ({100 * count / outliers.samples_seen:.1f}%) {kind}")


def run_and_analyse(
    should_run: Callable[[str], bool],
    env: Environment,
    benchmark: BenchmarkTree,
    config: Configuration,
) -> list[BenchmarkReport]:
    """
    Runs every benchmark whose full name passes `should_run`, logging the
    analysis of each, appending to the summary file and plotting as configured.
    """
    config = merge(DEFAULT_CONFIG, config)
    reports = []
    for name, bench in iter_benchmarks(benchmark):
        if not should_run(name):
            continue
        logger.info(f"benchmarking {name}")
        iterations, times = run_benchmark(env, config, bench.action)

        logger.debug(f"bootstrapping with {config.resample_count} resamples")
        mean, stddev = bootstrap(times, config.resample_count, config.confidence_interval)
        log_estimate("mean", mean)
        log_estimate("std dev", stddev)
        log_outliers(times)

        report = BenchmarkReport(name, iterations, times, mean, stddev)
        reports.append(report)
        if config.summary_file is not None:
            append_summary_row(config.summary_file, name, mean, stddev)
        plot_report(config, report)

    if config.plot_same_axis and Plot.KERNEL_DENSITY in config.plot_outputs and reports:
        low = min(float(r.times.min()) for r in reports)
        high = max(float(r.times.max()) for r in reports)
        from .plotter import plot_kde

        for report in reports:
            xs, densities = kernel_density(report.times, low=low, high=high)
            plot_kde(config.plot_outputs[Plot.KERNEL_DENSITY], report.name, xs, densities)
    return reports


def plot_report(config: Configuration, report: BenchmarkReport) -> None:
    """Renders the plots of a single benchmark, except for shared-axis KDEs."""
    if not config.plot_outputs:
        return
    from .plotter import plot_kde, plot_timing

    if Plot.TIMING in config.plot_outputs:
        plot_timing(config.plot_outputs[Plot.TIMING], report.name, report.times)
    if Plot.KERNEL_DENSITY in config.plot_outputs and not config.plot_same_axis:
        xs, densities = kernel_density(report.times)
        plot_kde(config.plot_outputs[Plot.KERNEL_DENSITY], report.name, xs, densities)
