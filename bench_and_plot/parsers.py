"""This module contains the parsers for command-line flag values."""

import re

from .config import CSV, PDF, PNG, SVG, PlotOutput, Window


class UsageError(Exception):
    """A malformed command line. The message is shown to the user as is."""


# Ordered so that "window" is tried before its prefix "win".
_PLOT_KINDS = {
    "window": Window,
    "win": Window,
    "pdf": PDF,
    "png": PNG,
    "svg": SVG,
}

_PLOT_RE = re.compile(
    r"(?P<kind>window|win|pdf|png|svg)(?::(?P<width>[0-9]+)x(?P<height>[0-9]+))?"
)
_DECIMAL_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?")
_INTEGER_RE = re.compile(r"-?[0-9]+")


def parse_plot(text: str) -> PlotOutput:
    """
    Parses a plot output such as "csv", "png" or "window:640x480".

    Kinds other than csv accept an optional WIDTHxHEIGHT suffix, which
    replaces the kind's default dimensions.
    """
    if text == "csv":
        return CSV()
    match = _PLOT_RE.fullmatch(text)
    if match is None:
        raise UsageError("unknown plot type")
    output = _PLOT_KINDS[match["kind"]]
    if match["width"] is None:
        return output()
    return output(int(match["width"]), int(match["height"]))


def parse_confidence_interval(text: str) -> float:
    """
    Parses a confidence interval given as a fraction ("0.95", ".95") or as a
    percentage ("95%").
    """
    if text.startswith("."):
        text = "0" + text
    number, scale = (text[:-1], 100) if text.endswith("%") else (text, 1)
    if not _DECIMAL_RE.fullmatch(number):
        raise UsageError("invalid confidence interval provided")
    d = float(number) / scale
    if d <= 0:
        raise UsageError("confidence interval is negative")
    if d >= 1:
        raise UsageError("confidence interval is greater than 1")
    return d


def parse_positive(text: str, quantity: str) -> int:
    """Parses a strictly positive integer, naming it `quantity` in errors."""
    if not _INTEGER_RE.fullmatch(text):
        raise UsageError(f"invalid {quantity} provided")
    n = int(text)
    if n <= 0:
        raise UsageError(f"{quantity} must be positive")
    return n
