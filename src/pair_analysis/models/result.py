"""AnalysisResult and its nested Pydantic models (the persisted JSON shape)."""

import enum

from pydantic import BaseModel

from pair_analysis.models.inputs import HedgeMethod


class TradeSignal(str, enum.Enum):
    SHORT_A_LONG_B = "SHORT_A_LONG_B"
    LONG_A_SHORT_B = "LONG_A_SHORT_B"
    NO_SIGNAL = "NO_SIGNAL"


class LegDirection(str, enum.Enum):
    LONG = "long"
    SHORT = "short"


class ExitRuleType(str, enum.Enum):
    PROFIT = "profit"
    PARTIAL = "partial"
    TIME = "time"
    STOP = "stop"


class Sentiment(str, enum.Enum):
    BULLISH = "Bullish"
    NEUTRAL = "Neutral"
    BEARISH = "Bearish"


class ResolvedInputs(BaseModel):
    assetA: str
    assetB: str
    priceA: float
    priceB: float
    lookbackN: int
    portfolioSizeUsd: float
    riskPct: float
    maxLeverageCap: float
    entryThresholdZ: float
    exitZ: float
    softExitZ: float
    maxHoldingDays: int
    stopLossMult: float
    takeProfitMult: float
    hedgeMethod: HedgeMethod

    model_config = {"frozen": True}


class AnalysisStats(BaseModel):
    correlation: float
    beta: float
    spreadMean: float
    spreadStdev: float
    spreadNow: float
    zScoreNow: float

    model_config = {"frozen": True}


class AnalysisSignal(BaseModel):
    tradeSignal: TradeSignal
    confidenceNote: str
    warnings: list[str] = []

    model_config = {"frozen": True}


class PositionLeg(BaseModel):
    direction: LegDirection
    usdNotional: float
    units: float
    leverageX: float | None = None
    stopLossPrice: float | None = None
    takeProfitPrice: float | None = None
    stopLossPercent: float | None = None
    takeProfitPercent: float | None = None

    model_config = {"frozen": True}


class AnalysisPositions(BaseModel):
    assetA: PositionLeg
    assetB: PositionLeg
    grossNotionalUsd: float
    suggestedLeverageX: float

    model_config = {"frozen": True}


class ExitRule(BaseModel):
    title: str
    description: str
    detail: str
    type: ExitRuleType

    model_config = {"frozen": True}


class AnalysisRiskPlan(BaseModel):
    riskBudgetUsd: float
    stopLossSpreadDistance: float
    takeProfitSpreadDistance: float
    exitRules: list[ExitRule]
    holdingTimeGuidance: str

    model_config = {"frozen": True}


class SentimentAnnotation(BaseModel):
    """Externally computed FOILS reading; carried through untouched."""

    oi: Sentiment
    fr: Sentiment
    ls: Sentiment
    overall: Sentiment
    confidence: float

    model_config = {"frozen": True}


class AnalysisResult(BaseModel):
    inputs: ResolvedInputs
    stats: AnalysisStats
    signal: AnalysisSignal
    positions: AnalysisPositions | None
    riskPlan: AnalysisRiskPlan
    foils: SentimentAnnotation | None = None

    model_config = {"frozen": True}

    def with_sentiment(self, annotation: SentimentAnnotation) -> "AnalysisResult":
        """Return a copy carrying the externally computed sentiment annotation."""
        return self.model_copy(update={"foils": annotation})

    def to_json(self) -> str:
        # foils is omitted when absent; positions stays as an explicit null
        exclude = {"foils"} if self.foils is None else None
        return self.model_dump_json(exclude=exclude)

    @classmethod
    def from_json(cls, data: str | bytes) -> "AnalysisResult":
        return cls.model_validate_json(data)


class SpreadCheck(BaseModel):
    """Current spread re-evaluated against a stored analysis' distribution."""

    priceA: float
    priceB: float
    spreadNow: float
    zScoreNow: float
    tradeSignal: TradeSignal


class ExitLevels(BaseModel):
    profitTargetSpread: float
    emergencyExitSpread: float
    direction: TradeSignal
