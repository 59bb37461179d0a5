"""This module contains the calibration of the timing environment."""

import logging
import time
from dataclasses import dataclass

import numpy as np

from .analysis import describe_duration

logger = logging.getLogger(__name__)

# Number of clock readings used for each estimate.
DEFAULT_ROUNDS = 10000


@dataclass(frozen=True)
class Environment:
    """
    Properties of the clock used to time benchmarks, in seconds.
    """

    clock_resolution: float
    clock_cost: float


def clock_resolution(rounds: int) -> float:
    """Mean positive gap between successive clock readings."""
    readings = np.array([time.perf_counter() for _ in range(rounds)])
    gaps = np.diff(readings)
    gaps = gaps[gaps > 0]
    if gaps.size == 0:
        return time.get_clock_info("perf_counter").resolution
    return float(gaps.mean())


def clock_cost(rounds: int) -> float:
    """Mean time taken by a single clock reading."""
    start = time.perf_counter()
    for _ in range(rounds):
        time.perf_counter()
    return (time.perf_counter() - start) / rounds


def measure_environment(rounds: int = DEFAULT_ROUNDS) -> Environment:
    """
    Estimates the resolution and the cost of the benchmark clock.
    """
    logger.info("warming up")
    clock_resolution(rounds)

    logger.info("estimating clock resolution...")
    resolution = clock_resolution(rounds)
    logger.info(f"mean is {describe_duration(resolution)} ({rounds} iterations)")

    logger.info("estimating cost of timer call...")
    cost = clock_cost(rounds)
    logger.info(f"mean is {describe_duration(cost)} ({rounds} iterations)")

    return Environment(clock_resolution=resolution, clock_cost=cost)
