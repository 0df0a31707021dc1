"""Centralized state dataclasses.

This module re-exports all state definitions from their respective modules,
providing a single import point for state types.
"""

from .device import DeviceDescriptor
from .encoding import EncodedInput
from .selection import ResponseSelection
from .result import ClassificationResult, PolitenessLevel, Prediction
from .analysis import AnalysisSnapshot, PendingAnalysis, ServiceStage

__all__ = [
    "AnalysisSnapshot",
    "ClassificationResult",
    "DeviceDescriptor",
    "EncodedInput",
    "PendingAnalysis",
    "PolitenessLevel",
    "Prediction",
    "ResponseSelection",
    "ServiceStage",
]
