"""Exception classification helpers for log labels."""

from __future__ import annotations

from .analysis import AnalysisCancelledError, AnalysisError
from .backend import BackendUnavailableError, ModelLoadError, NotInitializedError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (BackendUnavailableError, "backend_unavailable"),
    (ModelLoadError, "model_load"),
    (NotInitializedError, "not_initialized"),
    (AnalysisCancelledError, "cancelled"),
    (AnalysisError, "analysis"),
    (TimeoutError, "timeout"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a short category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
