"""Z-score thresholds -> trade signal and confidence note."""

from __future__ import annotations

from pair_analysis.models.result import TradeSignal

NO_SIGNAL_NOTE = "No entry signal. Current Z-score is within entry threshold."
STRONG_NOTE = "Strong signal. Z-score indicates significant deviation."
MODERATE_NOTE = "Moderate signal. Z-score indicates notable deviation."
WEAK_NOTE = "Weak signal. Z-score is near entry threshold."


class SignalGenerator:
    """
    | Condition           | Signal          |
    |---------------------|-----------------|
    | z >= entry          | SHORT_A_LONG_B  |
    | z <= -entry         | LONG_A_SHORT_B  |
    | Otherwise           | NO_SIGNAL       |

    Recomputed from scratch on every call; there are no transitions.
    """

    def __init__(self, strong_z: float = 3.0, moderate_z: float = 2.0) -> None:
        self.strong_z = strong_z
        self.moderate_z = moderate_z

    def generate(self, z_score_now: float, entry_threshold_z: float) -> tuple[TradeSignal, str]:
        signal = self._classify(z_score_now, entry_threshold_z)
        return signal, self._confidence_note(signal, z_score_now)

    def _classify(self, z_score_now: float, entry_threshold_z: float) -> TradeSignal:
        if z_score_now >= entry_threshold_z:
            return TradeSignal.SHORT_A_LONG_B
        if z_score_now <= -entry_threshold_z:
            return TradeSignal.LONG_A_SHORT_B
        return TradeSignal.NO_SIGNAL

    def _confidence_note(self, signal: TradeSignal, z_score_now: float) -> str:
        if signal is TradeSignal.NO_SIGNAL:
            return NO_SIGNAL_NOTE
        abs_z = abs(z_score_now)
        if abs_z >= self.strong_z:
            return STRONG_NOTE
        if abs_z >= self.moderate_z:
            return MODERATE_NOTE
        return WEAK_NOTE
