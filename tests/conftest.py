"""Fixtures for pair-analysis tests."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
import structlog

from pair_analysis.config import Settings
from pair_analysis.models.inputs import AnalysisInputs
from pair_analysis.models.result import AnalysisStats


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI reconfigures structlog to stderr; undo it between tests."""
    yield
    structlog.reset_defaults()


# --- Series helpers ---


def make_pair_series(
    rows: int = 60,
    base_b: float = 3000.0,
    slope: float = 10.0,
    intercept: float = 20000.0,
    noise: float = 50.0,
    step: float = 20.0,
    seed: int = 42,
) -> tuple[list[float], list[float]]:
    """B is a random walk; A = intercept + slope * B + gaussian noise."""
    rng = np.random.default_rng(seed)
    b = base_b + np.cumsum(rng.normal(0.0, step, rows))
    a = intercept + slope * b + rng.normal(0.0, noise, rows)
    return a.tolist(), b.tolist()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_pair() -> Callable[..., tuple[list[float], list[float]]]:
    return make_pair_series


@pytest.fixture
def pair_series() -> tuple[list[float], list[float]]:
    return make_pair_series()


@pytest.fixture
def make_inputs(pair_series) -> Callable[..., AnalysisInputs]:
    """Factory for valid inputs built on the seeded pair; keyword overrides win."""
    series_a, series_b = pair_series

    def _make(**overrides) -> AnalysisInputs:
        fields = {
            "assetA": "BTC",
            "assetB": "ETH",
            "priceA": series_a[-1],
            "priceB": series_b[-1],
            "historicalA": series_a,
            "historicalB": series_b,
            "lookbackN": None,
            "portfolioSizeUsd": 100000.0,
            "riskPct": 2.0,
            "maxLeverageCap": 3.0,
            "entryThresholdZ": 2.0,
            "exitZ": 0.0,
            "softExitZ": 1.0,
            "maxHoldingDays": 7,
            "stopLossMult": 1.5,
            "takeProfitMult": 0.75,
            "hedgeMethod": "regression",
        }
        fields.update(overrides)
        return AnalysisInputs(**fields)

    return _make


# --- Scenario: BTC 52000 / ETH 3000, beta 0.1, spread 51700 vs mean 50000 sd 600 ---


@pytest.fixture
def scenario_stats() -> AnalysisStats:
    return AnalysisStats(
        correlation=0.92,
        beta=0.1,
        spreadMean=50000.0,
        spreadStdev=600.0,
        spreadNow=51700.0,
        zScoreNow=(51700.0 - 50000.0) / 600.0,
    )


@pytest.fixture
def scenario_inputs(make_inputs) -> AnalysisInputs:
    return make_inputs(priceA=52000.0, priceB=3000.0)
