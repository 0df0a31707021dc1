"""Centralized exception classes for politeness analysis.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - base.py: PolitenessError root class
    - backend.py: Device/session lifecycle errors (unavailable, load, not bound)
    - analysis.py: Generation cancellation and opaque analysis failures
    - classify.py: Exception-to-label mapping
"""

from .base import PolitenessError
from .classify import classify_error
from .analysis import AnalysisCancelledError, AnalysisError
from .backend import BackendUnavailableError, ModelLoadError, NotInitializedError

__all__ = [
    "PolitenessError",
    # Backend lifecycle
    "BackendUnavailableError",
    "ModelLoadError",
    "NotInitializedError",
    # Analysis
    "AnalysisCancelledError",
    "AnalysisError",
    # Classification
    "classify_error",
]
