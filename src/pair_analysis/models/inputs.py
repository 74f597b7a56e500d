"""AnalysisInputs Pydantic model and hedge-method selector."""

import enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from pair_analysis.config import Settings


class HedgeMethod(str, enum.Enum):
    REGRESSION = "regression"
    VOL_RATIO = "volRatio"


class AnalysisInputs(BaseModel):
    assetA: str
    assetB: str
    priceA: float = Field(gt=0)
    priceB: float = Field(gt=0)
    historicalA: list[float]
    historicalB: list[float]
    lookbackN: int | None = None
    portfolioSizeUsd: float = Field(gt=0)
    riskPct: float
    maxLeverageCap: float = Field(gt=0)
    entryThresholdZ: float
    exitZ: float
    softExitZ: float
    maxHoldingDays: int
    stopLossMult: float
    takeProfitMult: float
    hedgeMethod: HedgeMethod = HedgeMethod.REGRESSION

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: "Settings", **fields) -> "AnalysisInputs":
        """Build inputs, filling every omitted parameter from the settings defaults."""
        defaults = {
            "portfolioSizeUsd": settings.DEFAULT_PORTFOLIO_SIZE_USD,
            "riskPct": settings.DEFAULT_RISK_PCT,
            "maxLeverageCap": settings.DEFAULT_MAX_LEVERAGE_CAP,
            "entryThresholdZ": settings.DEFAULT_ENTRY_THRESHOLD_Z,
            "exitZ": settings.DEFAULT_EXIT_Z,
            "softExitZ": settings.DEFAULT_SOFT_EXIT_Z,
            "maxHoldingDays": settings.DEFAULT_MAX_HOLDING_DAYS,
            "stopLossMult": settings.DEFAULT_STOP_LOSS_MULT,
            "takeProfitMult": settings.DEFAULT_TAKE_PROFIT_MULT,
            "hedgeMethod": settings.DEFAULT_HEDGE_METHOD,
        }
        defaults.update({k: v for k, v in fields.items() if v is not None})
        return cls(**defaults)
