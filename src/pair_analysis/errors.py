"""Exceptions raised by the pair-analysis engine."""


class PairAnalysisError(Exception):
    """Base class for engine errors."""


class ValidationError(PairAnalysisError, ValueError):
    """Inputs cannot produce a meaningful analysis (fatal, aborts the run)."""
