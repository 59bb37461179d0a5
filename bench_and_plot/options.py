"""This module contains the command-line option table and its argument parser."""

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NoReturn, Optional

from .config import Configuration, Plot, PrintExit, Verbosity
from .parsers import UsageError, parse_confidence_interval, parse_plot, parse_positive

USAGE = "%(prog)s [OPTIONS] [BENCHMARKS]"

EPILOG = """\
If no benchmark names are given, all are run
Otherwise, benchmarks are run by prefix match

Plot types:
  window or win   display a window immediately
  csv             save a CSV file
  pdf             save a PDF file
  png             save a PNG file
  svg             save an SVG file

You can specify plot dimensions via a suffix, e.g. "window:640x480"
Units are pixels for png and window, 72dpi points for pdf and svg
"""


@dataclass(frozen=True)
class Option:
    """
    One recognized flag.

    Flags with a `delta` take no argument and always contribute that delta.
    Flags with a `parse` function take one required argument and turn it into
    a delta, raising UsageError if the argument is malformed.
    """

    short: str
    long: Sequence[str]
    help: str
    delta: Optional[Configuration] = None
    parse: Optional[Callable[[str], Configuration]] = None
    metavar: Optional[str] = None

    @property
    def flags(self) -> list[str]:
        return [f"-{c}" for c in self.short] + [f"--{name}" for name in self.long]


def plot(kind: Plot) -> Callable[[str], Configuration]:
    def parse(text: str) -> Configuration:
        return Configuration(plot_outputs={kind: parse_plot(text)})

    return parse


def confidence_interval(text: str) -> Configuration:
    return Configuration(confidence_interval=parse_confidence_interval(text))


def positive(quantity: str, field: str) -> Callable[[str], Configuration]:
    """Binds a positive-number parser to the configuration field it sets."""

    def parse(text: str) -> Configuration:
        return Configuration(**{field: parse_positive(text, quantity)})

    return parse


def summary_file(text: str) -> Configuration:
    return Configuration(summary_file=text)


# The standard options accepted on the command line.
DEFAULT_OPTIONS: Sequence[Option] = (
    Option("h?", ["help"], "print help, then exit",
           delta=Configuration(print_exit=PrintExit.HELP)),
    Option("G", ["no-gc"], "do not collect garbage between iterations",
           delta=Configuration(perform_gc=False)),
    Option("g", ["gc"], "collect garbage between iterations",
           delta=Configuration(perform_gc=True)),
    Option("I", ["ci"], "bootstrap confidence interval",
           parse=confidence_interval, metavar="CI"),
    Option("l", ["list"], "print a list of all benchmark names, then exit",
           delta=Configuration(print_exit=PrintExit.LIST)),
    Option("k", ["plot-kde"], "plot kernel density estimate of probabilities",
           parse=plot(Plot.KERNEL_DENSITY), metavar="TYPE"),
    Option("", ["kde-same-axis"],
           "plot all KDE graphs with the same X axis range (useful for comparison)",
           delta=Configuration(plot_same_axis=True)),
    Option("q", ["quiet"], "print less output",
           delta=Configuration(verbosity=Verbosity.QUIET)),
    Option("", ["resamples"], "number of bootstrap resamples to perform",
           parse=positive("resample count", "resample_count"), metavar="N"),
    Option("s", ["samples"], "number of samples to collect",
           parse=positive("sample count", "sample_count"), metavar="N"),
    Option("t", ["plot-timing"], "plot timings",
           parse=plot(Plot.TIMING), metavar="TYPE"),
    Option("u", ["summary"],
           "produce a summary CSV file of all the benchmark means and standard deviations",
           parse=summary_file, metavar="FILENAME"),
    Option("V", ["version"], "display version, then exit",
           delta=Configuration(print_exit=PrintExit.VERSION)),
    Option("v", ["verbose"], "print more output",
           delta=Configuration(verbosity=Verbosity.VERBOSE)),
)


class OptionParser(argparse.ArgumentParser):
    """An ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser(
    options: Sequence[Option] = DEFAULT_OPTIONS, prog: Optional[str] = None
) -> OptionParser:
    """
    Builds the argparse parser for an option table.

    Every flag appends its delta to the shared "deltas" list, so the list
    keeps the order in which the flags appeared on the command line.
    """
    parser = OptionParser(
        prog=prog,
        usage=USAGE,
        epilog=EPILOG,
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    for option in options:
        if option.parse is None:
            parser.add_argument(
                *option.flags,
                action="append_const",
                dest="deltas",
                const=option.delta,
                help=option.help,
            )
        else:
            parser.add_argument(
                *option.flags,
                action="append",
                dest="deltas",
                type=option.parse,
                metavar=option.metavar,
                help=option.help,
            )
    parser.add_argument(
        "benchmarks",
        nargs="*",
        metavar="BENCHMARKS",
        help="prefixes of the names of the benchmarks to run",
    )
    return parser


def parse_options(
    argv: Sequence[str], options: Sequence[Option] = DEFAULT_OPTIONS
) -> tuple[list[Configuration], list[str]]:
    """
    Parses a command line into its flag deltas and positional arguments.

    Flags and positional arguments may be interleaved. Parsing stops at the
    first bad flag or flag value with a UsageError.
    """
    parser = build_parser(options)
    namespace = parser.parse_intermixed_args(list(argv))
    return list(namespace.deltas or []), list(namespace.benchmarks)


def format_usage(options: Sequence[Option] = DEFAULT_OPTIONS, prog: Optional[str] = None) -> str:
    return build_parser(options, prog).format_help()
