"""Runtime dependency container.

The analyzer stack is assembled once at startup and handed explicitly to
whatever drives it (CLI, UI shell, tests). Nothing is kept in module
globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from politeguard.analysis import AnalysisView, DebouncedAnalyzer, InferenceService
    from politeguard.classifier import ClassifierBackend


@dataclass(slots=True)
class RuntimeDeps:
    """Application-scoped analysis services."""

    backend: ClassifierBackend
    service: InferenceService
    analyzer: DebouncedAnalyzer

    @property
    def view(self) -> AnalysisView:
        return self.analyzer.view

    async def shutdown(self) -> None:
        await self.analyzer.close()
        await self.service.shutdown()


__all__ = ["RuntimeDeps"]
