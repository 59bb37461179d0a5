"""Tests for the summary CSV file."""

from pathlib import Path

from bench_and_plot.analysis import Estimate
from bench_and_plot.results import SUMMARY_HEADER, append_summary_row, write_summary_header


def test_header_truncates_existing_file(tmp_path: Path) -> None:
    summary = tmp_path / "summary.csv"
    summary.write_text("old\nrows\n")
    write_summary_header(str(summary))
    assert summary.read_text() == "Name,Mean,MeanLB,MeanUB,Stddev,StddevLB,StddevUB\n"


def test_rows_are_appended(tmp_path: Path) -> None:
    summary = tmp_path / "summary.csv"
    write_summary_header(str(summary))
    mean = Estimate(0.5, 0.25, 0.75, 0.95)
    stddev = Estimate(0.1, 0.05, 0.2, 0.95)
    append_summary_row(str(summary), "fib/fib 10", mean, stddev)
    append_summary_row(str(summary), "a,b", mean, stddev)
    assert summary.read_text() == (
        SUMMARY_HEADER
        + "fib/fib 10,0.5,0.25,0.75,0.1,0.05,0.2\n"
        + '"a,b",0.5,0.25,0.75,0.1,0.05,0.2\n'
    )
