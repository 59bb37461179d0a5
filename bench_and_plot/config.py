"""This module contains the configuration data structure for the application."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from functools import reduce
from typing import Optional, Union

from . import __version__


class PrintExit(Enum):
    NONE = "None"
    HELP = "Help"
    VERSION = "Version"
    LIST = "List"


class Verbosity(Enum):
    QUIET = "Quiet"
    NORMAL = "Normal"
    VERBOSE = "Verbose"


class Plot(Enum):
    """Which statistical curve a plot depicts."""

    KERNEL_DENSITY = "KernelDensity"
    TIMING = "Timing"


@dataclass(frozen=True)
class Window:
    width: int = 800
    height: int = 600


@dataclass(frozen=True)
class PDF:
    width: int = 432
    height: int = 324


@dataclass(frozen=True)
class PNG:
    width: int = 800
    height: int = 600


@dataclass(frozen=True)
class SVG:
    width: int = 432
    height: int = 324


@dataclass(frozen=True)
class CSV:
    pass


# Window and PNG are measured in pixels, PDF and SVG in 72dpi points.
PlotOutput = Union[Window, PDF, PNG, SVG, CSV]


@dataclass(frozen=True)
class Configuration:
    """
    Holds a possibly partial configuration.

    Every field defaults to "unset" (None, an empty mapping, or PrintExit.NONE),
    so a Configuration with a single field set doubles as the delta produced by
    one command-line flag.
    """

    print_exit: PrintExit = PrintExit.NONE
    perform_gc: Optional[bool] = None
    verbosity: Optional[Verbosity] = None
    confidence_interval: Optional[float] = None
    resample_count: Optional[int] = None
    sample_count: Optional[int] = None
    plot_outputs: Mapping[Plot, PlotOutput] = field(default_factory=dict)
    plot_same_axis: Optional[bool] = None
    summary_file: Optional[str] = None
    banner: Optional[str] = None

    def __post_init__(self) -> None:
        ci = self.confidence_interval
        if ci is not None and not 0 < ci < 1:
            raise ValueError(f"confidence interval must lie in (0, 1), got {ci}")
        for name in ("resample_count", "sample_count"):
            count = getattr(self, name)
            if count is not None and count <= 0:
                raise ValueError(f"{name} must be positive, got {count}")


EMPTY_CONFIG = Configuration()

DEFAULT_CONFIG = Configuration(
    perform_gc=False,
    verbosity=Verbosity.NORMAL,
    confidence_interval=0.95,
    resample_count=100 * 1000,
    sample_count=100,
    plot_same_axis=False,
    banner=f"bench_and_plot {__version__}",
)


def _is_set(value: object) -> bool:
    return value is not None and value is not PrintExit.NONE


def merge(a: Configuration, b: Configuration) -> Configuration:
    """
    Overlays b on top of a.

    Scalar fields take b's value when b sets them and a's otherwise. Plot
    outputs are combined key by key, with b's output winning for a plot kind
    both of them set.
    """
    overrides = {
        f.name: getattr(b, f.name)
        for f in fields(b)
        if f.name != "plot_outputs" and _is_set(getattr(b, f.name))
    }
    overrides["plot_outputs"] = {**a.plot_outputs, **b.plot_outputs}
    return replace(a, **overrides)


def merge_all(configs: Iterable[Configuration]) -> Configuration:
    """Merges configurations left to right, so later ones win."""
    return reduce(merge, configs, EMPTY_CONFIG)
