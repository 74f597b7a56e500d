"""Settings (pydantic-settings, loaded from env vars)."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- Validation ---
    MIN_DATA_POINTS: int = 20

    # --- Warnings / sizing guards ---
    MIN_CORRELATION: float = 0.7
    SPREAD_STDEV_EPSILON: float = 1e-9

    # --- Signal confidence ---
    STRONG_SIGNAL_Z: float = 3.0
    MODERATE_SIGNAL_Z: float = 2.0

    # --- Input defaults (dashboard form) ---
    DEFAULT_PORTFOLIO_SIZE_USD: float = 100000.0
    DEFAULT_RISK_PCT: float = 2.0
    DEFAULT_MAX_LEVERAGE_CAP: float = 3.0
    DEFAULT_ENTRY_THRESHOLD_Z: float = 2.0
    DEFAULT_EXIT_Z: float = 0.0
    DEFAULT_SOFT_EXIT_Z: float = 1.0
    DEFAULT_MAX_HOLDING_DAYS: int = 7
    DEFAULT_STOP_LOSS_MULT: float = 1.5
    DEFAULT_TAKE_PROFIT_MULT: float = 0.75
    DEFAULT_HEDGE_METHOD: str = "regression"

    model_config = {"env_prefix": "", "case_sensitive": True}
