"""Entry point: run one pair analysis from price files and print the JSON result."""

import argparse
import sys
from pathlib import Path

import structlog

from pair_analysis.config import Settings
from pair_analysis.engine.analyzer import run_analysis
from pair_analysis.errors import ValidationError
from pair_analysis.models.inputs import AnalysisInputs, HedgeMethod
from pair_analysis.stats.series_stats import parse_series


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pair-analysis",
        description="Pair-trading analysis: signal, delta-neutral sizing and exit plan.",
    )
    parser.add_argument("--asset-a", default="A", help="Asset A identifier")
    parser.add_argument("--asset-b", default="B", help="Asset B identifier")
    parser.add_argument("--price-a", type=float, required=True, help="Current spot price of A")
    parser.add_argument("--price-b", type=float, required=True, help="Current spot price of B")
    parser.add_argument(
        "--history-a", type=Path, required=True, help="File of A prices (comma/newline separated)"
    )
    parser.add_argument(
        "--history-b", type=Path, required=True, help="File of B prices (comma/newline separated)"
    )
    parser.add_argument("--lookback", type=int, default=None, help="Use only the last N points")
    parser.add_argument("--portfolio", type=float, default=None, help="Portfolio size in USD")
    parser.add_argument("--risk-pct", type=float, default=None, help="Risk per trade (%%)")
    parser.add_argument("--max-leverage", type=float, default=None, help="Gross leverage cap")
    parser.add_argument("--entry-z", type=float, default=None)
    parser.add_argument("--exit-z", type=float, default=None)
    parser.add_argument("--soft-exit-z", type=float, default=None)
    parser.add_argument("--max-holding-days", type=int, default=None)
    parser.add_argument("--stop-loss-mult", type=float, default=None)
    parser.add_argument("--take-profit-mult", type=float, default=None)
    parser.add_argument(
        "--hedge-method",
        choices=[m.value for m in HedgeMethod],
        default=None,
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    # keep stdout clean for the JSON result
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    settings = Settings()

    historical_a = parse_series(args.history_a.read_text())
    historical_b = parse_series(args.history_b.read_text())
    if not historical_a or not historical_b:
        print("Please provide historical data for both assets", file=sys.stderr)
        return 2

    inputs = AnalysisInputs.from_settings(
        settings,
        assetA=args.asset_a.strip() or "A",
        assetB=args.asset_b.strip() or "B",
        priceA=args.price_a,
        priceB=args.price_b,
        historicalA=historical_a,
        historicalB=historical_b,
        lookbackN=args.lookback,
        portfolioSizeUsd=args.portfolio,
        riskPct=args.risk_pct,
        maxLeverageCap=args.max_leverage,
        entryThresholdZ=args.entry_z,
        exitZ=args.exit_z,
        softExitZ=args.soft_exit_z,
        maxHoldingDays=args.max_holding_days,
        stopLossMult=args.stop_loss_mult,
        takeProfitMult=args.take_profit_mult,
        hedgeMethod=args.hedge_method,
    )

    try:
        result = run_analysis(inputs, settings)
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(result.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
