"""Observable analysis state for presentation bindings.

Holds the latest AnalysisSnapshot (status line, level text, latency text)
and notifies subscribers only when a field actually changes.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from ..state import AnalysisSnapshot
from .observers import ObserverList


class AnalysisView:
    """Latest published analysis state."""

    def __init__(self) -> None:
        self._snapshot = AnalysisSnapshot()
        self._observers: ObserverList[AnalysisSnapshot] = ObserverList()

    @property
    def snapshot(self) -> AnalysisSnapshot:
        return self._snapshot

    def subscribe(self, listener: Callable[[AnalysisSnapshot], None]) -> Callable[[], None]:
        return self._observers.subscribe(listener)

    def update(
        self,
        *,
        status: str | None = None,
        level: str | None = None,
        elapsed_ms: str | None = None,
        generation: int | None = None,
    ) -> bool:
        """Apply the given fields; return True if anything changed."""
        changes = {
            name: value
            for name, value in (
                ("status", status),
                ("level", level),
                ("elapsed_ms", elapsed_ms),
                ("generation", generation),
            )
            if value is not None and getattr(self._snapshot, name) != value
        }
        if not changes:
            return False
        self._snapshot = dataclasses.replace(self._snapshot, **changes)
        self._observers.notify(self._snapshot)
        return True

    def clear(self, generation: int | None = None) -> bool:
        return self.update(status="", level="", elapsed_ms="", generation=generation)


__all__ = ["AnalysisView"]
