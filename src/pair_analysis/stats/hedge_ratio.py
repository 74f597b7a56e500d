"""Hedge ratio (beta) estimation: OLS regression or volatility ratio."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import structlog

from pair_analysis.models.inputs import HedgeMethod
from pair_analysis.stats.series_stats import pearson_correlation, returns, stdev_sample

logger = structlog.get_logger()


def compute_beta_regression(series_a: Sequence[float], series_b: Sequence[float]) -> float:
    """OLS slope of A on B: sum((B - mB)(A - mA)) / sum((B - mB)^2)."""
    a = np.asarray(series_a, dtype=float)
    b = np.asarray(series_b, dtype=float)
    if a.size != b.size or a.size < 2:
        return 0.0

    diff_b = b - np.mean(b)
    denominator = float(np.sum(diff_b * diff_b))
    if denominator == 0:
        return 0.0
    return float(np.sum((a - np.mean(a)) * diff_b)) / denominator


def compute_beta_vol_ratio(series_a: Sequence[float], series_b: Sequence[float]) -> float:
    """corr(rA, rB) * stdev(rA) / stdev(rB) over simple returns."""
    if len(series_a) != len(series_b) or len(series_a) < 2:
        return 0.0

    returns_a = returns(series_a)
    returns_b = returns(series_b)
    stdev_b = stdev_sample(returns_b)
    if stdev_b == 0:
        return 0.0
    return pearson_correlation(returns_a, returns_b) * (stdev_sample(returns_a) / stdev_b)


class HedgeRatioEstimator:
    """
    Units of B that offset one unit of A.

    | Method      | Estimator                                   |
    |-------------|---------------------------------------------|
    | regression  | OLS slope of A on B                         |
    | volRatio    | corr(returns) * stdev(rA) / stdev(rB)       |

    Degenerate input yields 0.0; callers treat beta <= 0 as non-fatal.
    """

    _METHODS = {
        HedgeMethod.REGRESSION: compute_beta_regression,
        HedgeMethod.VOL_RATIO: compute_beta_vol_ratio,
    }

    def estimate(
        self,
        series_a: Sequence[float],
        series_b: Sequence[float],
        method: HedgeMethod = HedgeMethod.REGRESSION,
    ) -> float:
        beta = self._METHODS[HedgeMethod(method)](series_a, series_b)
        logger.debug("hedge_ratio_estimated", method=HedgeMethod(method).value, beta=beta)
        return beta
