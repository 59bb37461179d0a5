"""This module handles the summary CSV file of benchmark results."""

import csv

from .analysis import Estimate

SUMMARY_HEADER = "Name,Mean,MeanLB,MeanUB,Stddev,StddevLB,StddevUB\n"


def write_summary_header(csv_filename: str) -> None:
    """
    Creates (or truncates) the summary file, leaving only the header line.
    """
    with open(csv_filename, "w", newline="") as csvfile:
        csvfile.write(SUMMARY_HEADER)


def append_summary_row(csv_filename: str, name: str, mean: Estimate, stddev: Estimate) -> None:
    with open(csv_filename, "a", newline="") as csvfile:
        writer = csv.writer(csvfile, lineterminator="\n")
        writer.writerow(
            [
                name,
                mean.point,
                mean.lower_bound,
                mean.upper_bound,
                stddev.point,
                stddev.lower_bound,
                stddev.upper_bound,
            ]
        )
