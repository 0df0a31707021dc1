"""Debounced, latest-wins analysis over a stream of text changes.

Each ``on_text_changed()`` call opens a new generation and supersedes the
previous one in the same synchronous step:

1. The previous PendingAnalysis is marked cancelled. If it is still in
   its quiet-period wait its task is cancelled outright, so no inference
   ever runs for it.
2. A superseded generation that already reached the service keeps running
   (the forward pass is not interrupted) but its result or error is
   dropped.
3. Only the latest generation writes to the AnalysisView.

Blank text clears the view immediately, without waiting or calling the
service.
"""

from __future__ import annotations

import asyncio
import logging

from ..config.status import STATUS_ANALYSIS_ERROR, STATUS_RUNNING
from ..config.timeouts import POLITE_DEBOUNCE_MS
from ..errors import AnalysisCancelledError, AnalysisError, classify_error
from ..logging import log_context
from ..state import ClassificationResult, PendingAnalysis
from .service import InferenceService
from .view import AnalysisView

logger = logging.getLogger(__name__)


class DebouncedAnalyzer:
    """Latest-wins orchestrator between text edits and the inference service.

    Must be driven from the event-loop thread.

    Attributes:
        view: Observable state the orchestrator publishes to.
        quiet_period_s: Seconds of silence required before inference.
    """

    def __init__(
        self,
        service: InferenceService,
        *,
        view: AnalysisView | None = None,
        debounce_ms: float = POLITE_DEBOUNCE_MS,
    ) -> None:
        self._service = service
        self.view = view or AnalysisView()
        self.quiet_period_s = max(0.0, float(debounce_ms)) / 1000.0

        self._generation = 0
        self._pending: PendingAnalysis | None = None
        self._tasks: set[asyncio.Task] = set()
        self._warmup_task: asyncio.Task | None = None
        self._unsubscribe_status = None

    # ============================================================================
    # Introspection
    # ============================================================================

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> PendingAnalysis | None:
        return self._pending

    # ============================================================================
    # Internal helpers
    # ============================================================================

    def _track(self, task: asyncio.Task) -> asyncio.Task:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_live(self, pending: PendingAnalysis) -> bool:
        return not pending.cancelled and self._pending is pending

    def _ensure_live(self, pending: PendingAnalysis) -> None:
        if not self._is_live(pending):
            raise AnalysisCancelledError(pending.generation)

    def _supersede(self, pending: PendingAnalysis) -> None:
        pending.cancelled = True
        task = pending.task
        if task is not None and not pending.inferring and not task.done():
            task.cancel()

    def _publish(self, pending: PendingAnalysis, *, status: str, level: str, elapsed_ms: str) -> None:
        if not self._is_live(pending):
            return
        self.view.update(status=status, level=level, elapsed_ms=elapsed_ms, generation=pending.generation)

    def _on_service_status(self, status: str) -> None:
        self.view.update(status=status)

    async def _warm_up(self) -> None:
        try:
            await self._service.initialize()
        except Exception as exc:  # noqa: BLE001
            # The service already published the failure stage; analyze() retries init.
            logger.warning("debounce: background initialization failed category=%s: %s", classify_error(exc), exc)

    async def _analyze_when_quiet(self, pending: PendingAnalysis) -> ClassificationResult:
        await asyncio.sleep(self.quiet_period_s)
        self._ensure_live(pending)

        pending.inferring = True
        self._publish(pending, status=STATUS_RUNNING, level="", elapsed_ms="")
        try:
            result = await self._service.analyze(pending.text)
        except Exception as exc:  # noqa: BLE001
            self._ensure_live(pending)
            raise AnalysisError(f"analysis failed ({classify_error(exc)}): {exc}") from exc
        self._ensure_live(pending)
        return result

    async def _run(self, pending: PendingAnalysis) -> None:
        with log_context(generation=pending.generation):
            try:
                result = await self._analyze_when_quiet(pending)
            except AnalysisCancelledError:
                logger.debug("debounce: superseded after inference, result dropped")
                return
            except AnalysisError as exc:
                logger.warning("debounce: %s", exc)
                self._publish(pending, status=STATUS_ANALYSIS_ERROR, level="", elapsed_ms="")
                return

            logger.debug("debounce: publishing level=%s ms=%d", result.level.value, result.elapsed_ms)
            self._publish(
                pending,
                status="",
                level=result.level.display_name,
                elapsed_ms=f"{result.elapsed_ms} ms",
            )

    # ============================================================================
    # Public API
    # ============================================================================

    def start(self) -> asyncio.Task:
        """Mirror service status into the view and begin initialization."""
        if self._unsubscribe_status is None:
            self._unsubscribe_status = self._service.status.subscribe(self._on_service_status)
        if self._warmup_task is None:
            loop = asyncio.get_running_loop()
            self._warmup_task = self._track(loop.create_task(self._warm_up(), name="politeness-warmup"))
        return self._warmup_task

    def on_text_changed(self, text: str) -> PendingAnalysis:
        """Register a text edit; fire-and-forget."""
        self._generation += 1
        pending = PendingAnalysis(generation=self._generation, text=text or "")

        previous, self._pending = self._pending, pending
        if previous is not None:
            self._supersede(previous)

        if not pending.text.strip():
            self.view.clear(generation=pending.generation)
            return pending

        loop = asyncio.get_running_loop()
        pending.task = self._track(
            loop.create_task(self._run(pending), name=f"politeness-gen-{pending.generation}")
        )
        return pending

    async def wait_idle(self) -> None:
        """Wait until the latest generation has finished (or was abandoned)."""
        while True:
            pending = self._pending
            task = pending.task if pending is not None else None
            if task is None or task.done():
                return
            await asyncio.wait({task})

    async def close(self) -> None:
        """Abandon outstanding work and detach from the service status channel."""
        if self._pending is not None:
            self._supersede(self._pending)
        if self._warmup_task is not None and not self._warmup_task.done():
            self._warmup_task.cancel()
        if self._unsubscribe_status is not None:
            self._unsubscribe_status()
            self._unsubscribe_status = None
        if self._tasks:
            await asyncio.wait(set(self._tasks))


__all__ = ["DebouncedAnalyzer"]
