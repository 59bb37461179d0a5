"""This module contains the statistical analysis of benchmark samples."""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

# Upper bound on the number of values drawn at once while bootstrapping.
BOOTSTRAP_CHUNK_ELEMENTS = 1_000_000


@dataclass(frozen=True)
class Estimate:
    point: float
    lower_bound: float
    upper_bound: float
    confidence_level: float


@dataclass(frozen=True)
class Outliers:
    """
    Counts of samples outside the inner (1.5 IQR) and outer (3 IQR) fences.
    """

    samples_seen: int
    low_severe: int = 0
    low_mild: int = 0
    high_mild: int = 0
    high_severe: int = 0

    @property
    def total(self) -> int:
        return self.low_severe + self.low_mild + self.high_mild + self.high_severe


def _std(values: np.ndarray, axis: Optional[int] = None) -> np.ndarray:
    size = values.shape[-1] if axis is not None else values.size
    return values.std(axis=axis, ddof=1 if size > 1 else 0)


def bootstrap(
    sample: np.ndarray,
    resamples: int,
    confidence_level: float,
    rng: Optional[np.random.Generator] = None,
) -> tuple[Estimate, Estimate]:
    """
    Estimates the mean and standard deviation of a sample, with percentile
    bootstrap bounds at the given confidence level.

    Returns:
        The (mean, standard deviation) estimates.
    """
    sample = np.asarray(sample, dtype=float)
    if sample.size == 0:
        raise ValueError("cannot analyse an empty sample")
    rng = rng or np.random.default_rng()
    n = sample.size

    means = np.empty(resamples)
    stddevs = np.empty(resamples)
    chunk = max(1, BOOTSTRAP_CHUNK_ELEMENTS // n)
    for start in range(0, resamples, chunk):
        stop = min(start + chunk, resamples)
        drawn = sample[rng.integers(0, n, size=(stop - start, n))]
        means[start:stop] = drawn.mean(axis=1)
        stddevs[start:stop] = _std(drawn, axis=1)

    alpha = (1 - confidence_level) / 2

    def estimate(point: float, resampled: np.ndarray) -> Estimate:
        low, high = np.quantile(resampled, [alpha, 1 - alpha])
        return Estimate(float(point), float(low), float(high), confidence_level)

    return estimate(sample.mean(), means), estimate(_std(sample), stddevs)


def count_outliers(sample: np.ndarray) -> Outliers:
    """Classifies samples using Tukey's fences."""
    sample = np.asarray(sample, dtype=float)
    q1, q3 = np.quantile(sample, [0.25, 0.75])
    iqr = q3 - q1
    low_severe = int(np.sum(sample < q1 - 3 * iqr))
    low_mild = int(np.sum(sample < q1 - 1.5 * iqr)) - low_severe
    high_severe = int(np.sum(sample > q3 + 3 * iqr))
    high_mild = int(np.sum(sample > q3 + 1.5 * iqr)) - high_severe
    return Outliers(sample.size, low_severe, low_mild, high_mild, high_severe)


def kernel_density(
    sample: np.ndarray,
    points: int = 256,
    low: Optional[float] = None,
    high: Optional[float] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Gaussian kernel density estimate of a sample, using Silverman's rule of
    thumb for the bandwidth.

    Args:
        sample: The values to estimate the density of.
        points: Number of evenly spaced points to evaluate the density at.
        low: Lower end of the evaluation range. Defaults to three bandwidths
            below the smallest value.
        high: Upper end of the evaluation range. Defaults to three bandwidths
            above the largest value.

    Returns:
        The evaluation points and the density at each of them.
    """
    sample = np.asarray(sample, dtype=float)
    bandwidth = 1.06 * float(_std(sample)) * sample.size ** -0.2
    if bandwidth <= 0:
        # All values are equal. Pick a width relative to their magnitude.
        bandwidth = abs(float(sample[0])) * 1e-3 or 1e-9
    if low is None:
        low = float(sample.min()) - 3 * bandwidth
    if high is None:
        high = float(sample.max()) + 3 * bandwidth
    xs = np.linspace(low, high, points)
    z = (xs[:, np.newaxis] - sample[np.newaxis, :]) / bandwidth
    densities = np.exp(-0.5 * z**2).sum(axis=1) / (sample.size * bandwidth * math.sqrt(2 * math.pi))
    return xs, densities


def describe_duration(seconds: float) -> str:
    """Formats a duration with a unit suited to its size, e.g. "1.235 ms"."""
    if seconds < 0:
        return "-" + describe_duration(-seconds)
    for unit, scale in (("s", 1.0), ("ms", 1e-3), ("us", 1e-6)):
        if seconds >= scale:
            return f"{seconds / scale:.4g} {unit}"
    return f"{seconds / 1e-9:.4g} ns"
