"""Inference service and orchestrator state."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum


class ServiceStage(str, Enum):
    """Initialization stages of the inference service."""

    UNINITIALIZED = "uninitialized"
    PRE_INITIALIZING = "pre_initializing"
    DEVICE_READY = "device_ready"
    SESSION_BOUND = "session_bound"


@dataclass(slots=True)
class PendingAnalysis:
    """One text-change generation tracked by the debounce orchestrator.

    Attributes:
        generation: Monotonic event counter value for this snapshot.
        text: Text captured when the event fired.
        cancelled: Set once a newer generation supersedes this one.
        inferring: True once the quiet period elapsed and the service call began.
        task: Background task driving the wait and the service call.
    """

    generation: int
    text: str
    cancelled: bool = False
    inferring: bool = False
    task: asyncio.Task | None = field(default=None, repr=False)


@dataclass(frozen=True, slots=True)
class AnalysisSnapshot:
    """Externally visible analysis state consumed by presentation bindings."""

    status: str = ""
    level: str = ""
    elapsed_ms: str = ""
    generation: int = 0


__all__ = ["ServiceStage", "PendingAnalysis", "AnalysisSnapshot"]
