"""Delta-neutral two-leg sizing under a gross leverage cap."""

from __future__ import annotations

import math
from typing import NamedTuple

import structlog

from pair_analysis.models.inputs import AnalysisInputs
from pair_analysis.models.result import (
    AnalysisPositions,
    AnalysisStats,
    LegDirection,
    PositionLeg,
    TradeSignal,
)

logger = structlog.get_logger()

# Conservative sizing factor: the full risk budget is spent at the stop-loss distance.
SIZING_K = 1.0


class _Legs(NamedTuple):
    units_a: float
    units_b: float
    usd_a: float
    usd_b: float

    @property
    def gross_notional(self) -> float:
        return abs(self.usd_a) + abs(self.usd_b)


class _LegTargets(NamedTuple):
    stop_loss_price: float
    take_profit_price: float
    stop_loss_percent: float
    take_profit_percent: float


class PositionSizer:
    """
    Sizing steps:
    1. risk budget = portfolio * riskPct / 100
    2. x (USD of B) = riskBudget * priceB / (k * stopLossSpreadDistance)
    3. unitsB = x / priceB, unitsA = beta * unitsB * priceB / priceA
    4. leverage = max(1, gross / portfolio)
    5. above the cap, x is re-solved from the cap equation
       x = portfolio * cap * priceB / (priceB + beta * priceA)
       and both legs are rebuilt from it (never a uniform rescale)

    Returns None when beta is not a finite positive number or the spread
    stdev is degenerate.
    """

    def __init__(self, stdev_epsilon: float = 1e-9) -> None:
        self.stdev_epsilon = stdev_epsilon

    def can_size(self, beta: float, spread_stdev: float) -> bool:
        return math.isfinite(beta) and beta > 0 and spread_stdev > self.stdev_epsilon

    @staticmethod
    def resolve_direction(signal: TradeSignal, z_score_now: float) -> TradeSignal:
        """Use the signal; with NO_SIGNAL fall back to the z-score sign for reference sizing."""
        if signal is not TradeSignal.NO_SIGNAL:
            return signal
        return TradeSignal.SHORT_A_LONG_B if z_score_now >= 0 else TradeSignal.LONG_A_SHORT_B

    def size(
        self, inputs: AnalysisInputs, stats: AnalysisStats, signal: TradeSignal
    ) -> AnalysisPositions | None:
        beta = stats.beta
        if not self.can_size(beta, stats.spreadStdev):
            logger.info(
                "position_sizing_skipped",
                beta=beta,
                spread_stdev=stats.spreadStdev,
            )
            return None

        risk_budget = inputs.portfolioSizeUsd * (inputs.riskPct / 100)
        stop_loss_distance = inputs.stopLossMult * stats.spreadStdev
        take_profit_distance = inputs.takeProfitMult * stats.spreadStdev
        if stop_loss_distance <= 0:
            logger.info("position_sizing_skipped", stop_loss_distance=stop_loss_distance)
            return None

        direction = self.resolve_direction(signal, stats.zScoreNow)
        price_a, price_b = inputs.priceA, inputs.priceB
        portfolio = inputs.portfolioSizeUsd

        x = (risk_budget * price_b) / (SIZING_K * stop_loss_distance)
        legs = self._legs_for_notional(x, beta, price_a, price_b)
        suggested_leverage = max(1.0, legs.gross_notional / portfolio)

        if suggested_leverage > inputs.maxLeverageCap:
            cap = inputs.maxLeverageCap
            x = (portfolio * cap * price_b) / (price_b + beta * price_a)
            legs = self._legs_for_notional(x, beta, price_a, price_b)
            if legs.gross_notional > portfolio * cap:
                # priceB > priceA leaves the cap equation short; solve gross = x * (1 + beta)
                legs = self._legs_for_notional(portfolio * cap / (1 + beta), beta, price_a, price_b)
            logger.info(
                "leverage_clamped",
                suggested_leverage=suggested_leverage,
                max_leverage_cap=cap,
                gross_notional=legs.gross_notional,
            )
            suggested_leverage = cap

        targets_a, targets_b = self._leg_targets(
            direction, beta, stop_loss_distance, take_profit_distance, price_a, price_b
        )
        short_a = direction is TradeSignal.SHORT_A_LONG_B

        return AnalysisPositions(
            assetA=self._build_leg(
                LegDirection.SHORT if short_a else LegDirection.LONG,
                legs.usd_a,
                legs.units_a,
                portfolio,
                targets_a,
            ),
            assetB=self._build_leg(
                LegDirection.LONG if short_a else LegDirection.SHORT,
                legs.usd_b,
                legs.units_b,
                portfolio,
                targets_b,
            ),
            grossNotionalUsd=legs.gross_notional,
            suggestedLeverageX=suggested_leverage,
        )

    @staticmethod
    def _legs_for_notional(x: float, beta: float, price_a: float, price_b: float) -> _Legs:
        units_b = x / price_b
        units_a = (beta * units_b * price_b) / price_a
        return _Legs(units_a=units_a, units_b=units_b, usd_a=units_a * price_a, usd_b=x)

    @staticmethod
    def _leg_targets(
        direction: TradeSignal,
        beta: float,
        stop_loss_distance: float,
        take_profit_distance: float,
        price_a: float,
        price_b: float,
    ) -> tuple[_LegTargets, _LegTargets]:
        """Split one spread move across both legs by 1 / (1 + beta^2)."""
        adjustment = 1 / (1 + beta * beta)
        # SHORT_A_LONG_B loses when the spread widens: A up, B down
        sign = 1.0 if direction is TradeSignal.SHORT_A_LONG_B else -1.0

        stop_adjust_a = sign * stop_loss_distance * adjustment / beta
        stop_adjust_b = -sign * stop_loss_distance * adjustment
        take_adjust_a = -sign * take_profit_distance * adjustment / beta
        take_adjust_b = sign * take_profit_distance * adjustment

        targets_a = _LegTargets(
            stop_loss_price=price_a + stop_adjust_a,
            take_profit_price=price_a + take_adjust_a,
            stop_loss_percent=(stop_adjust_a / price_a) * 100,
            take_profit_percent=(take_adjust_a / price_a) * 100,
        )
        targets_b = _LegTargets(
            stop_loss_price=price_b + stop_adjust_b,
            take_profit_price=price_b + take_adjust_b,
            stop_loss_percent=(stop_adjust_b / price_b) * 100,
            take_profit_percent=(take_adjust_b / price_b) * 100,
        )
        return targets_a, targets_b

    @staticmethod
    def _build_leg(
        direction: LegDirection,
        usd: float,
        units: float,
        portfolio: float,
        targets: _LegTargets,
    ) -> PositionLeg:
        return PositionLeg(
            direction=direction,
            usdNotional=abs(usd),
            units=abs(units),
            leverageX=abs(usd) / portfolio,
            stopLossPrice=targets.stop_loss_price,
            takeProfitPrice=targets.take_profit_price,
            stopLossPercent=targets.stop_loss_percent,
            takeProfitPercent=targets.take_profit_percent,
        )
