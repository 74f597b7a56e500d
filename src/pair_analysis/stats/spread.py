"""Spread series and current z-score for a hedged pair."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel

from pair_analysis.stats.series_stats import mean, stdev_sample, z_score


class SpreadStats(BaseModel):
    spread_mean: float
    spread_stdev: float
    spread_now: float
    z_score_now: float


def compute_spread_series(
    series_a: Sequence[float], series_b: Sequence[float], beta: float
) -> np.ndarray:
    """spread[t] = A[t] - beta * B[t]; empty when the series are misaligned."""
    a = np.asarray(series_a, dtype=float)
    b = np.asarray(series_b, dtype=float)
    if a.size != b.size:
        return np.array([], dtype=float)
    return a - beta * b


class SpreadEngine:
    """
    Distribution statistics come from history; the current spread comes from
    live spot prices, so a stored mean/stdev can be re-evaluated later against
    fresh prices.
    """

    def compute(
        self,
        series_a: Sequence[float],
        series_b: Sequence[float],
        beta: float,
        price_a: float,
        price_b: float,
    ) -> SpreadStats:
        spread = compute_spread_series(series_a, series_b, beta)
        spread_mean = mean(spread)
        spread_stdev = stdev_sample(spread)
        spread_now = self.current_spread(price_a, price_b, beta)
        return SpreadStats(
            spread_mean=spread_mean,
            spread_stdev=spread_stdev,
            spread_now=spread_now,
            z_score_now=z_score(spread_now, spread_mean, spread_stdev),
        )

    @staticmethod
    def current_spread(price_a: float, price_b: float, beta: float) -> float:
        return price_a - beta * price_b
