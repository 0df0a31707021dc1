"""Analysis-time exceptions.

AnalysisCancelledError marks a superseded generation and never reaches the
user. AnalysisError wraps any other failure of a live generation.
"""

from .base import PolitenessError


class AnalysisCancelledError(PolitenessError):
    """Raised when a generation is superseded before it could publish."""

    def __init__(self, generation: int) -> None:
        super().__init__(f"generation {generation} superseded")
        self.generation = generation


class AnalysisError(PolitenessError):
    """Opaque failure of a live generation's inference call."""


__all__ = ["AnalysisCancelledError", "AnalysisError"]
