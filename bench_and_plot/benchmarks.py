"""This module contains the benchmark definitions and the selection of benchmarks by name."""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class B:
    """
    A function paired with its last argument.

    Calling it applies the function, so the whole application is what gets
    timed rather than just a precomputed result.
    """

    function: Callable[[Any], Any]
    argument: Any

    def __call__(self) -> Any:
        return self.function(self.argument)


@dataclass
class Benchmark:
    name: str
    action: Callable[[], Any]


@dataclass
class BenchGroup:
    name: str
    benchmarks: Sequence["BenchmarkTree"] = field(default_factory=list)


BenchmarkTree = Union[Benchmark, BenchGroup]


def bench(name: str, action: Callable[[], Any]) -> Benchmark:
    """Creates a benchmark from a zero-argument callable, e.g. B(fib, 30)."""
    return Benchmark(name, action)


def bgroup(name: str, benchmarks: Sequence[BenchmarkTree]) -> BenchGroup:
    return BenchGroup(name, list(benchmarks))


def join_name(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


def iter_benchmarks(tree: BenchmarkTree, prefix: str = "") -> Iterator[tuple[str, Benchmark]]:
    """
    Yields every benchmark in the tree with its full '/'-joined name, in the
    order the benchmarks were declared.
    """
    full_name = join_name(prefix, tree.name)
    match tree:
        case Benchmark():
            yield full_name, tree
        case BenchGroup():
            for child in tree.benchmarks:
                yield from iter_benchmarks(child, full_name)


def benchmark_names(benchmarks: Sequence[BenchmarkTree]) -> list[str]:
    return [name for tree in benchmarks for name, _ in iter_benchmarks(tree)]


def matches(name: str, filters: Sequence[str]) -> bool:
    """True if no filters are given, or if any filter is a prefix of the name."""
    return not filters or any(name.startswith(f) for f in filters)


def should_run(filters: Sequence[str]) -> Callable[[str], bool]:
    filters = list(filters)
    return lambda name: matches(name, filters)


def select_benchmarks(names: Sequence[str], filters: Sequence[str]) -> list[str]:
    """
    Picks the benchmarks to run.

    A name is selected when it starts with any of the filters (a plain string
    prefix, not a path segment); with no filters every name is selected. The
    declared order of the names is kept.
    """
    return [name for name in names if matches(name, filters)]
