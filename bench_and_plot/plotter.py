"""This module contains the plotting functionality."""

import csv
import logging
import re
from collections.abc import Sequence

import matplotlib.pyplot as plt
import numpy as np

from .analysis import describe_duration
from .config import CSV, PDF, PNG, SVG, PlotOutput, Window

logger = logging.getLogger(__name__)

# Window and PNG dimensions are pixels, rendered at this resolution.
PIXEL_DPI = 100
# PDF and SVG dimensions are points.
POINTS_PER_INCH = 72

_EXTENSIONS = {PDF: "pdf", PNG: "png", SVG: "svg", CSV: "csv"}


def mangle(text: str) -> str:
    """Turns a benchmark name into something safe to use as a file name."""
    return re.sub(r"[^\w.]+", "-", text).strip("-")


def output_filename(name: str, description: str, output: PlotOutput) -> str:
    """
    Builds the file a plot is saved to, e.g. "fib-fib-10-timings-800x600.png".
    """
    extension = _EXTENSIONS[type(output)]
    if isinstance(output, CSV):
        return f"{mangle(f'{name} {description}')}.{extension}"
    return f"{mangle(f'{name} {description} {output.width}x{output.height}')}.{extension}"


def _figure_size(output: PlotOutput) -> tuple[tuple[float, float], float]:
    dpi = PIXEL_DPI if isinstance(output, (Window, PNG)) else POINTS_PER_INCH
    return (output.width / dpi, output.height / dpi), dpi


def _write_csv(filename: str, columns: Sequence[str], xs: np.ndarray, ys: np.ndarray) -> None:
    with open(filename, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(columns)
        writer.writerows(zip(xs.tolist(), ys.tolist()))
    logger.info(f"Plot data saved as '{filename}'")


def _render(output: PlotOutput, name: str, description: str) -> None:
    """Shows or saves the current figure, then closes it."""
    plt.tight_layout()
    if isinstance(output, Window):
        logger.info("Displaying plot interactively...")
        plt.show()
    else:
        filename = output_filename(name, description, output)
        plt.savefig(filename)
        logger.info(f"Plot saved as '{filename}'")
    plt.close()


def plot_timing(output: PlotOutput, name: str, times: np.ndarray) -> None:
    """
    Plots the time taken by each sample of a benchmark, in collection order.

    Args:
        output: Where the plot goes.
        name: The full name of the benchmark, used for the title and file name.
        times: Seconds per iteration for each sample.
    """
    times = np.asarray(times, dtype=float)
    indices = np.arange(1, times.size + 1)
    if isinstance(output, CSV):
        _write_csv(output_filename(name, "timings", output), ["Sample", "Time"], indices, times)
        return

    size, dpi = _figure_size(output)
    plt.figure(figsize=size, dpi=dpi)
    plt.bar(indices, times, color="skyblue", edgecolor="black")
    plt.title(f"{name} timings")
    plt.xlabel("Sample")
    plt.ylabel(f"Execution Time (seconds, mean {describe_duration(float(times.mean()))})")
    plt.grid(axis="y", linestyle="--", alpha=0.6)
    _render(output, name, "timings")


def plot_kde(output: PlotOutput, name: str, xs: np.ndarray, densities: np.ndarray) -> None:
    """Plots a kernel density estimate of a benchmark's times."""
    if isinstance(output, CSV):
        _write_csv(output_filename(name, "densities", output), ["Time", "Density"], xs, densities)
        return

    size, dpi = _figure_size(output)
    plt.figure(figsize=size, dpi=dpi)
    plt.plot(xs, densities, "-", label="Probability density")
    plt.fill_between(xs, densities, alpha=0.3)
    plt.title(f"{name} densities")
    plt.xlabel("Execution Time (seconds)")
    plt.ylabel("Estimate of probability density")
    plt.grid(True, linestyle="--", alpha=0.6)
    plt.legend()
    _render(output, name, "densities")
