"""Tests for the top-level dispatch of the command line."""

from pathlib import Path
from typing import Any

import pytest

from bench_and_plot import main
from bench_and_plot.benchmarks import bench, bgroup
from bench_and_plot.config import DEFAULT_CONFIG, Configuration, Verbosity
from bench_and_plot.environment import Environment
from bench_and_plot.results import SUMMARY_HEADER

BENCHMARKS = [
    bgroup("sort", [bench("sort 100", lambda: sorted(range(100)))]),
    bgroup("fib", [bench("fib 35", lambda: None), bench("fib 10", lambda: None)]),
]


@pytest.fixture
def collaborators(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replaces the measurement collaborators, recording how they are called."""
    calls: dict[str, Any] = {}
    env = Environment(clock_resolution=1e-7, clock_cost=0.0)

    def fake_measure_environment() -> Environment:
        calls["measured"] = True
        return env

    def fake_run_and_analyse(should_run, environment, tree, config) -> list:
        calls["should_run"] = should_run
        calls["environment"] = environment
        calls["tree"] = tree
        calls["config"] = config
        return []

    monkeypatch.setattr(main, "measure_environment", fake_measure_environment)
    monkeypatch.setattr(main, "run_and_analyse", fake_run_and_analyse)
    monkeypatch.setattr(main, "prog_name", lambda: "bench")
    return calls


def test_parse_args_merges_over_baseline() -> None:
    config, filters = main.parse_args(DEFAULT_CONFIG, argv=["fib", "-s", "7", "-q", "-v"])
    assert filters == ["fib"]
    assert config.sample_count == 7
    assert config.verbosity == Verbosity.VERBOSE
    assert config.resample_count == DEFAULT_CONFIG.resample_count


def test_help_prints_banner_and_usage(capsys: pytest.CaptureFixture[str], collaborators: dict) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.parse_args(Configuration(banner="fib 1.0"), argv=["--help"])
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("fib 1.0\nusage: bench [OPTIONS] [BENCHMARKS]")
    assert "--plot-kde TYPE" in out
    assert "If no benchmark names are given, all are run" in out


def test_version_prints_banner(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.parse_args(Configuration(banner="fib 1.0"), argv=["-V", "fib"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "fib 1.0\n"


def test_missing_banner(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main.parse_args(Configuration(), argv=["--version"])
    assert capsys.readouterr().out == "Hey, nobody told me what version I am!\n"


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--ci", "0%"], "confidence interval is negative"),
        (["-s", "0"], "sample count must be positive"),
        (["-t", "csv:1x1"], "unknown plot type"),
    ],
)
def test_usage_error_exits_64(
    argv: list[str], message: str, capsys: pytest.CaptureFixture[str], collaborators: dict
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.default_main(BENCHMARKS, argv=["fib", *argv])
    assert excinfo.value.code == main.EX_USAGE == 64
    err = capsys.readouterr().err
    assert err == f'Error: {message}\nRun "bench --help" for usage information\n'
    assert collaborators == {}


def test_unknown_flag_exits_64(capsys: pytest.CaptureFixture[str], collaborators: dict) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.default_main(BENCHMARKS, argv=["--bogus"])
    assert excinfo.value.code == 64
    assert capsys.readouterr().err.startswith("Error: ")
    assert collaborators == {}


def test_list_prints_sorted_names_ignoring_filters(
    capsys: pytest.CaptureFixture[str], collaborators: dict
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.default_main(BENCHMARKS, argv=["--list", "sort"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == (
        "Benchmarks:\n"
        "  fib/fib 10\n"
        "  fib/fib 35\n"
        "  sort/sort 100\n"
    )
    assert collaborators == {}


def test_help_wins_over_list_when_later(capsys: pytest.CaptureFixture[str], collaborators: dict) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.default_main(BENCHMARKS, argv=["-l", "-h"])
    assert excinfo.value.code == 0
    assert "Benchmarks:" not in capsys.readouterr().out


def test_run_hands_config_and_selection_to_engine(collaborators: dict) -> None:
    main.default_main(BENCHMARKS, argv=["fib", "-s", "3"])
    assert collaborators["measured"]
    assert collaborators["config"].sample_count == 3
    assert collaborators["tree"].name == ""
    assert list(collaborators["tree"].benchmarks) == BENCHMARKS
    should_run = collaborators["should_run"]
    assert should_run("fib/fib 10")
    assert not should_run("sort/sort 100")


def test_run_without_filters_selects_everything(collaborators: dict) -> None:
    main.default_main(BENCHMARKS, argv=[])
    assert collaborators["should_run"]("sort/sort 100")
    assert collaborators["config"] == DEFAULT_CONFIG


def test_run_writes_summary_header_first(tmp_path: Path, collaborators: dict) -> None:
    summary = tmp_path / "summary.csv"
    summary.write_text("stale contents\n")
    main.default_main(BENCHMARKS, argv=["--summary", str(summary)])
    assert summary.read_text() == SUMMARY_HEADER
    assert SUMMARY_HEADER == "Name,Mean,MeanLB,MeanUB,Stddev,StddevLB,StddevUB\n"


def test_default_main_with_uses_baseline(collaborators: dict) -> None:
    baseline = Configuration(sample_count=42, verbosity=Verbosity.QUIET)
    main.default_main_with(baseline, BENCHMARKS, argv=["-v"])
    assert collaborators["config"].sample_count == 42
    assert collaborators["config"].verbosity == Verbosity.VERBOSE
