"""Analysis orchestration: inference service, debounce and observable state.

Architecture:
    InferenceService:
        - Lazy, once-only initialization (encoder, model, devices, session)
        - Device reselection without re-enumeration
        - Timed single-text analysis
        - StatusChannel of initialization stage strings

    DebouncedAnalyzer:
        - Quiet-period debounce over text-change events
        - Generation counter; only the latest generation publishes
        - Publishes {status, level, elapsed_ms} to an AnalysisView
"""

from __future__ import annotations

from .view import AnalysisView
from .status import StatusChannel
from .debounce import DebouncedAnalyzer
from .service import InferenceService, ModelResolver

__all__ = [
    "AnalysisView",
    "DebouncedAnalyzer",
    "InferenceService",
    "ModelResolver",
    "StatusChannel",
]
