"""Exit rules and holding guidance derived from the spread distribution."""

from __future__ import annotations

from pair_analysis.models.inputs import AnalysisInputs
from pair_analysis.models.result import AnalysisRiskPlan, ExitRule, ExitRuleType


def format_number(value: float) -> str:
    """Render 2.0 as '2' and 1.25 as '1.25' for user-facing text."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class RiskPlanBuilder:
    """
    Five fixed exit rules, same order for every direction:

    | Rule                      | Trigger                              | Type    |
    |---------------------------|--------------------------------------|---------|
    | Target Exit (Profit)      | z reaches exitZ                      | profit  |
    | Soft Exit (Partial Profit)| |z| <= softExitZ                     | partial |
    | Time Limit                | maxHoldingDays elapsed               | time    |
    | Stop Loss (Risk Control)  | spread moves stopLossMult*sd against | stop    |
    | Take Profit (Quick Win)   | spread moves takeProfitMult*sd for   | profit  |

    Declarative only; nothing here monitors a live position.
    """

    def build(self, inputs: AnalysisInputs, spread_stdev: float) -> AnalysisRiskPlan:
        risk_budget = inputs.portfolioSizeUsd * (inputs.riskPct / 100)
        stop_loss_distance = inputs.stopLossMult * spread_stdev
        take_profit_distance = inputs.takeProfitMult * spread_stdev

        return AnalysisRiskPlan(
            riskBudgetUsd=risk_budget,
            stopLossSpreadDistance=stop_loss_distance,
            takeProfitSpreadDistance=take_profit_distance,
            exitRules=self._exit_rules(
                inputs, risk_budget, stop_loss_distance, take_profit_distance
            ),
            holdingTimeGuidance=self._holding_guidance(inputs.maxHoldingDays),
        )

    def _exit_rules(
        self,
        inputs: AnalysisInputs,
        risk_budget: float,
        stop_loss_distance: float,
        take_profit_distance: float,
    ) -> list[ExitRule]:
        return [
            ExitRule(
                title="Target Exit (Profit)",
                description=(
                    "Exit when spread returns to normal "
                    f"(Z-score reaches {format_number(inputs.exitZ)})"
                ),
                detail="This is your main profit target - when the spread reverts to its average",
                type=ExitRuleType.PROFIT,
            ),
            ExitRule(
                title="Soft Exit (Partial Profit)",
                description=(
                    "Consider taking partial profits when spread gets close to normal "
                    f"(Z-score ≤ {format_number(inputs.softExitZ)})"
                ),
                detail="The spread is moving back toward normal - good time to lock in some gains",
                type=ExitRuleType.PARTIAL,
            ),
            ExitRule(
                title="Time Limit",
                description=f"Exit after {inputs.maxHoldingDays} days regardless of profit/loss",
                detail=(
                    "Hold positions for the required period, but don't exceed this limit. "
                    "Monitor funding costs daily."
                ),
                type=ExitRuleType.TIME,
            ),
            ExitRule(
                title="Stop Loss (Risk Control)",
                description=(
                    f"Exit immediately if spread moves {stop_loss_distance:.2f} against you"
                ),
                detail=(
                    f"This limits your loss to ${risk_budget:.2f} "
                    f"({format_number(inputs.riskPct)}% of portfolio)"
                ),
                type=ExitRuleType.STOP,
            ),
            ExitRule(
                title="Take Profit (Quick Win)",
                description=(
                    f"Consider exiting early if spread moves {take_profit_distance:.2f} "
                    "in your favor"
                ),
                detail=(
                    "Lock in profits if the spread moves strongly in your direction "
                    "before reaching target"
                ),
                type=ExitRuleType.PROFIT,
            ),
        ]

    def _holding_guidance(self, max_holding_days: int) -> str:
        return (
            "These delta-neutral positions are designed to minimize market risk. "
            "Monitor funding rates hourly/daily - high funding costs can erode profits. "
            "Exit immediately if any stop loss conditions are met. "
            f"Hold for {max_holding_days} days maximum."
        )
