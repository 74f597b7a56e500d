"""Pair analysis pipeline: stats -> signal -> positions -> risk plan."""

from __future__ import annotations

import math

import structlog

from pair_analysis.config import Settings
from pair_analysis.engine.position_sizer import PositionSizer
from pair_analysis.engine.risk_plan import RiskPlanBuilder, format_number
from pair_analysis.engine.signal_generator import SignalGenerator
from pair_analysis.errors import ValidationError
from pair_analysis.models.inputs import AnalysisInputs
from pair_analysis.models.result import (
    AnalysisResult,
    AnalysisSignal,
    AnalysisStats,
    ExitLevels,
    ResolvedInputs,
    SpreadCheck,
    TradeSignal,
)
from pair_analysis.stats.hedge_ratio import HedgeRatioEstimator
from pair_analysis.stats.series_stats import pearson_correlation, z_score
from pair_analysis.stats.spread import SpreadEngine

logger = structlog.get_logger()


class PairAnalyzer:
    """
    Single-pass, side-effect-free analysis of one pair.

    Fatal (raises ValidationError): misaligned series, too few points after
    the lookback window. Non-fatal conditions become warnings and only leave
    positions empty.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.hedge_ratio = HedgeRatioEstimator()
        self.spread_engine = SpreadEngine()
        self.signal_generator = SignalGenerator(
            strong_z=self.settings.STRONG_SIGNAL_Z,
            moderate_z=self.settings.MODERATE_SIGNAL_Z,
        )
        self.position_sizer = PositionSizer(stdev_epsilon=self.settings.SPREAD_STDEV_EPSILON)
        self.risk_plan_builder = RiskPlanBuilder()

    def analyze(self, inputs: AnalysisInputs) -> AnalysisResult:
        series_a, series_b = self._apply_lookback(inputs)
        self._validate(inputs, series_a, series_b)

        warnings: list[str] = []

        correlation = pearson_correlation(series_a, series_b)
        if correlation < self.settings.MIN_CORRELATION:
            self._warn(
                warnings,
                f"Low correlation ({correlation:.3f}). "
                "Pair may not be suitable for mean reversion.",
                reason="low_correlation",
            )

        beta = self.hedge_ratio.estimate(series_a, series_b, inputs.hedgeMethod)
        if not math.isfinite(beta) or beta <= 0:
            self._warn(
                warnings,
                f"Invalid beta ({format_number(beta)}). "
                "Cannot size positions.",
                reason="invalid_beta",
            )

        spread = self.spread_engine.compute(series_a, series_b, beta, inputs.priceA, inputs.priceB)
        if spread.spread_stdev <= self.settings.SPREAD_STDEV_EPSILON:
            self._warn(
                warnings,
                "Spread standard deviation too small. Cannot size positions.",
                reason="degenerate_spread",
            )

        stats = AnalysisStats(
            correlation=correlation,
            beta=beta,
            spreadMean=spread.spread_mean,
            spreadStdev=spread.spread_stdev,
            spreadNow=spread.spread_now,
            zScoreNow=spread.z_score_now,
        )

        trade_signal, confidence_note = self.signal_generator.generate(
            stats.zScoreNow, inputs.entryThresholdZ
        )
        positions = self.position_sizer.size(inputs, stats, trade_signal)
        risk_plan = self.risk_plan_builder.build(inputs, stats.spreadStdev)

        result = AnalysisResult(
            inputs=self._resolve_inputs(inputs, len(series_a)),
            stats=stats,
            signal=AnalysisSignal(
                tradeSignal=trade_signal,
                confidenceNote=confidence_note,
                warnings=warnings,
            ),
            positions=positions,
            riskPlan=risk_plan,
        )
        logger.info(
            "analysis_complete",
            pair=f"{inputs.assetA}/{inputs.assetB}",
            signal=trade_signal.value,
            z_score=stats.zScoreNow,
            has_positions=positions is not None,
            warnings=len(warnings),
        )
        return result

    def _apply_lookback(self, inputs: AnalysisInputs) -> tuple[list[float], list[float]]:
        series_a = list(inputs.historicalA)
        series_b = list(inputs.historicalB)
        if inputs.lookbackN and inputs.lookbackN > 0:
            series_a = series_a[-inputs.lookbackN :]
            series_b = series_b[-inputs.lookbackN :]
        return series_a, series_b

    def _validate(
        self, inputs: AnalysisInputs, series_a: list[float], series_b: list[float]
    ) -> None:
        error: str | None = None
        if len(series_a) != len(series_b):
            error = "Historical series lengths must match"
        elif len(series_a) < self.settings.MIN_DATA_POINTS:
            error = f"Need at least {self.settings.MIN_DATA_POINTS} data points"

        if error is not None:
            logger.warning(
                "analysis_validation_failed",
                pair=f"{inputs.assetA}/{inputs.assetB}",
                error=error,
                len_a=len(series_a),
                len_b=len(series_b),
            )
            raise ValidationError(error)

    def _warn(self, warnings: list[str], message: str, reason: str) -> None:
        warnings.append(message)
        logger.warning("analysis_warning", reason=reason, message=message)

    def _resolve_inputs(self, inputs: AnalysisInputs, used_points: int) -> ResolvedInputs:
        lookback = inputs.lookbackN if inputs.lookbackN and inputs.lookbackN > 0 else used_points
        return ResolvedInputs(
            **inputs.model_dump(exclude={"historicalA", "historicalB", "lookbackN"}),
            lookbackN=lookback,
        )


def run_analysis(inputs: AnalysisInputs, settings: Settings | None = None) -> AnalysisResult:
    """Run the full pair analysis. Raises ValidationError on unusable input."""
    return PairAnalyzer(settings).analyze(inputs)


def recheck_spread(result: AnalysisResult, price_a: float, price_b: float) -> SpreadCheck:
    """
    Re-evaluate a stored analysis against fresh spot prices.

    Reuses the stored beta, spread mean and stdev; nothing is recomputed from
    history.
    """
    spread_now = SpreadEngine.current_spread(price_a, price_b, result.stats.beta)
    z_now = z_score(spread_now, result.stats.spreadMean, result.stats.spreadStdev)
    trade_signal, _ = SignalGenerator().generate(z_now, result.inputs.entryThresholdZ)
    return SpreadCheck(
        priceA=price_a,
        priceB=price_b,
        spreadNow=spread_now,
        zScoreNow=z_now,
        tradeSignal=trade_signal,
    )


def exit_levels(result: AnalysisResult) -> ExitLevels:
    """Spread levels for closing at target and for the emergency stop."""
    stats = result.stats
    direction = PositionSizer.resolve_direction(result.signal.tradeSignal, stats.zScoreNow)
    stop_distance = result.riskPlan.stopLossSpreadDistance
    if direction is TradeSignal.SHORT_A_LONG_B:
        emergency = stats.spreadNow + stop_distance
    else:
        emergency = stats.spreadNow - stop_distance
    return ExitLevels(
        profitTargetSpread=stats.spreadMean + result.inputs.exitZ * stats.spreadStdev,
        emergencyExitSpread=emergency,
        direction=direction,
    )
