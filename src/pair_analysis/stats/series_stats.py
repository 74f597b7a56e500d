"""Descriptive statistics over plain numeric series."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

import numpy as np

SERIES_SEPARATORS = re.compile(r"[,\n]")


def _as_array(values: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float] | np.ndarray) -> float:
    """Arithmetic mean; 0.0 for an empty series."""
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(np.mean(arr))


def stdev_sample(values: Sequence[float] | np.ndarray) -> float:
    """Sample standard deviation (n - 1 denominator); 0.0 below two points."""
    arr = _as_array(values)
    if arr.size < 2:
        return 0.0
    return float(np.std(arr, ddof=1))


def pearson_correlation(
    series_a: Sequence[float] | np.ndarray, series_b: Sequence[float] | np.ndarray
) -> float:
    """
    Pearson correlation of two aligned series.

    Returns 0.0 for mismatched or too-short input and for a zero-variance
    series.
    """
    a = _as_array(series_a)
    b = _as_array(series_b)
    if a.size != b.size or a.size < 2:
        return 0.0

    diff_a = a - np.mean(a)
    diff_b = b - np.mean(b)
    numerator = float(np.sum(diff_a * diff_b))
    denominator = math.sqrt(float(np.sum(diff_a * diff_a)) * float(np.sum(diff_b * diff_b)))
    if denominator == 0:
        return 0.0
    # rounding can push |r| a hair past 1
    return float(np.clip(numerator / denominator, -1.0, 1.0))


def returns(series: Sequence[float] | np.ndarray) -> list[float]:
    """Simple period-over-period returns (length n - 1)."""
    arr = _as_array(series)
    if arr.size < 2:
        return []
    return (np.diff(arr) / arr[:-1]).tolist()


def z_score(x: float, mean: float, stdev: float) -> float:
    """z = (x - mean) / stdev, defined as 0.0 when stdev is 0."""
    if stdev == 0:
        return 0.0
    return (x - mean) / stdev


def parse_series(text: str) -> list[float]:
    """
    Parse comma- or newline-separated prices.

    Tokens that are blank, non-numeric, non-finite or not strictly positive are
    dropped. Never raises; may return an empty list.
    """
    if not text or not text.strip():
        return []

    values: list[float] = []
    for token in SERIES_SEPARATORS.split(text):
        token = token.strip()
        if not token:
            continue
        try:
            value = float(token)
        except ValueError:
            continue
        if math.isfinite(value) and value > 0:
            values.append(value)
    return values
