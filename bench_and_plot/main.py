"""This module contains the main entry points for running benchmarks."""

import logging
import os
import sys
from collections.abc import Sequence
from typing import NoReturn, Optional

from .benchmarks import BenchGroup, BenchmarkTree, benchmark_names, select_benchmarks, should_run
from .config import DEFAULT_CONFIG, Configuration, PrintExit, Verbosity, merge, merge_all
from .environment import measure_environment
from .options import DEFAULT_OPTIONS, Option, format_usage, parse_options
from .parsers import UsageError
from .results import write_summary_header
from .runner import run_and_analyse

# Exit status for a command line usage error (sysexits.h).
EX_USAGE = 64

# Configure basic logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def prog_name() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "bench"


def configure_logging(verbosity: Optional[Verbosity]) -> None:
    """Sets the package's log level from the configured verbosity."""
    package_logger = logging.getLogger(__package__)
    match verbosity:
        case Verbosity.QUIET:
            package_logger.setLevel(logging.WARNING)
        case Verbosity.VERBOSE:
            package_logger.setLevel(logging.DEBUG)
        case _:
            package_logger.setLevel(logging.INFO)


def parse_error(message: str, prog: Optional[str] = None) -> NoReturn:
    """
    Reports a command line parsing failure and exits.
    """
    print(f"Error: {message}", file=sys.stderr)
    print(f'Run "{prog or prog_name()} --help" for usage information', file=sys.stderr)
    sys.exit(EX_USAGE)


def print_banner(config: Configuration) -> None:
    if config.banner is not None:
        print(config.banner)
    else:
        print("Hey, nobody told me what version I am!")


def print_usage(options: Sequence[Option], prog: Optional[str] = None) -> None:
    print(format_usage(options, prog or prog_name()), end="")


def parse_args(
    baseline: Configuration,
    options: Sequence[Option] = DEFAULT_OPTIONS,
    argv: Optional[Sequence[str]] = None,
) -> tuple[Configuration, list[str]]:
    """
    Parses the command line on top of a baseline configuration.

    Exits the process on a usage error, or after printing help or the version.

    Returns:
        The merged configuration and the benchmark name prefixes given.
    """
    if argv is None:
        argv = sys.argv[1:]
    try:
        deltas, filters = parse_options(argv, options)
    except UsageError as e:
        parse_error(str(e))

    config = merge(baseline, merge_all(deltas))
    match config.print_exit:
        case PrintExit.HELP:
            print_banner(config)
            print_usage(options)
            sys.exit(0)
        case PrintExit.VERSION:
            print_banner(config)
            sys.exit(0)
    return config, filters


def default_main(benchmarks: Sequence[BenchmarkTree], argv: Optional[Sequence[str]] = None) -> None:
    """
    An entry point that can be used as a script's main function.

    Example:

        def fib(n):
            return n if n < 2 else fib(n - 1) + fib(n - 2)

        if __name__ == "__main__":
            default_main([
                bgroup("fib", [
                    bench("fib 10", B(fib, 10)),
                    bench("fib 20", B(fib, 20)),
                ]),
            ])

    Run the script with --help for the list of command line options.
    """
    default_main_with(DEFAULT_CONFIG, benchmarks, argv)


def default_main_with(
    baseline: Configuration,
    benchmarks: Sequence[BenchmarkTree],
    argv: Optional[Sequence[str]] = None,
) -> None:
    """
    Like default_main, but with a caller-supplied baseline configuration,
    e.g. one that always plots timings to a window.
    """
    config, filters = parse_args(baseline, DEFAULT_OPTIONS, argv)
    configure_logging(config.verbosity)
    names = benchmark_names(benchmarks)

    if config.print_exit == PrintExit.LIST:
        print("Benchmarks:")
        for name in sorted(names):
            print(f"  {name}")
        sys.exit(0)

    if filters and not select_benchmarks(names, filters):
        logger.warning(f"No benchmarks match {' '.join(filters)}")

    if config.summary_file is not None:
        write_summary_header(config.summary_file)
    env = measure_environment()
    run_and_analyse(should_run(filters), env, BenchGroup("", benchmarks), config)
