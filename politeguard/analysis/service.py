"""Inference service: lazy initialization and single-request analysis.

Stages:
    UNINITIALIZED -> PRE_INITIALIZING -> DEVICE_READY -> SESSION_BOUND

``analyze()`` drives any missing stages before running, exactly once even
when several callers arrive together: ``_init_lock`` serializes
initialization and every path re-checks the stage after acquiring it.

``_session_lock`` is held around every forward pass and every rebind, so a
device change waits for the in-flight run and queued analyses wait for the
new session. When a run outlives its timeout the caller gets a
TimeoutError right away but the lock is only released once the worker
thread has let go of the session. A bind whose caller is cancelled keeps
both locks until the bind thread returns, so a second bind or a shutdown
never overlaps it.

Initialization progress is published on ``status`` as stage strings.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path

from ..classifier import ClassifierBackend, map_to_level
from ..config.model import POLITE_CONFIDENCE_THRESHOLD
from ..config.timeouts import POLITE_ANALYZE_TIMEOUT_S
from ..config.status import (
    NO_TEXT_DESCRIPTION,
    STAGE_INIT_FAILED,
    STAGE_LOADING_MODEL,
    STAGE_LOADING_TOKENIZER,
    STAGE_MODEL_READY,
    STAGE_READY_FOR_SELECTION,
    STAGE_RESOLVING_MODEL,
    STAGE_ENUMERATING_DEVICES,
)
from ..errors import ModelLoadError, NotInitializedError, classify_error
from ..logging import log_context
from ..state import ClassificationResult, DeviceDescriptor, PolitenessLevel, Prediction, ServiceStage
from ..tokens import Encoder
from .status import StatusChannel

logger = logging.getLogger(__name__)

ModelResolver = Callable[[], "str | Path"]


class InferenceService:
    """Owns the encoder and the bound classifier session.

    Attributes:
        status: Channel receiving initialization stage strings.
        threshold: Confidence cutoff between soft and extreme tiers.
    """

    def __init__(
        self,
        backend: ClassifierBackend,
        *,
        encoder_factory: Callable[[], Encoder] = Encoder,
        model_resolver: ModelResolver | None = None,
        threshold: float = POLITE_CONFIDENCE_THRESHOLD,
        run_timeout_s: float | None = POLITE_ANALYZE_TIMEOUT_S,
        status: StatusChannel | None = None,
    ) -> None:
        self._backend = backend
        self._encoder_factory = encoder_factory
        self._model_resolver = model_resolver
        self.threshold = float(threshold)
        self._run_timeout_s = run_timeout_s if run_timeout_s and run_timeout_s > 0 else None
        self.status = status or StatusChannel()

        self._encoder: Encoder | None = None
        self._stage = ServiceStage.UNINITIALIZED
        self._init_lock = asyncio.Lock()
        self._session_lock = asyncio.Lock()

    # ============================================================================
    # Introspection
    # ============================================================================

    @property
    def stage(self) -> ServiceStage:
        return self._stage

    @property
    def device(self) -> DeviceDescriptor | None:
        return self._backend.device

    @property
    def backend(self) -> ClassifierBackend:
        return self._backend

    # ============================================================================
    # Internal helpers
    # ============================================================================

    def _set_stage(self, stage: ServiceStage) -> None:
        if stage is not self._stage:
            logger.debug("service: stage %s -> %s", self._stage.value, stage.value)
        self._stage = stage

    def _publish(self, status: str) -> None:
        logger.info("service: %s", status)
        self.status.publish(status)

    def _resolve_model_path(self) -> Path:
        resolver = self._model_resolver
        if resolver is None:
            return self._backend.model_path
        try:
            return Path(resolver())
        except ModelLoadError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ModelLoadError(f"model resolution failed: {exc}", model_path=str(self._backend.model_path)) from exc

    async def _pre_initialize_locked(self) -> None:
        self._set_stage(ServiceStage.PRE_INITIALIZING)
        try:
            self._publish(STAGE_LOADING_TOKENIZER)
            self._encoder = self._encoder_factory()

            if self._model_resolver is not None:
                self._publish(STAGE_RESOLVING_MODEL)
                self._backend.model_path = await asyncio.to_thread(self._resolve_model_path)

            self._publish(STAGE_ENUMERATING_DEVICES)
            devices = await asyncio.to_thread(self._backend.enumerate_devices)
        except asyncio.CancelledError:
            self._set_stage(ServiceStage.UNINITIALIZED)
            raise
        except Exception as exc:
            self._set_stage(ServiceStage.UNINITIALIZED)
            logger.error("service: pre-initialization failed category=%s: %s", classify_error(exc), exc)
            self._publish(STAGE_INIT_FAILED)
            raise

        logger.info("service: devices=%s", [str(d) for d in devices])
        self._set_stage(ServiceStage.DEVICE_READY)
        self._publish(STAGE_READY_FOR_SELECTION)

    async def _settle(self, work: asyncio.Future) -> None:
        """Wait for a worker thread the caller stopped waiting on."""
        while not work.done():
            try:
                await asyncio.wait({work})
            except asyncio.CancelledError:
                continue
        if not work.cancelled() and work.exception() is not None:
            logger.warning("service: abandoned bind failed: %s", work.exception())

    async def _bind_locked(self, device: DeviceDescriptor | str | None) -> DeviceDescriptor:
        async with self._session_lock:
            try:
                target = self._backend.resolve_device(device)
                self._publish(STAGE_LOADING_MODEL.format(device=target.name))
                with log_context(device=target.device_id):
                    bind = asyncio.ensure_future(asyncio.to_thread(self._backend.bind, target))
                    try:
                        await asyncio.shield(bind)
                    except asyncio.CancelledError:
                        # The bind thread cannot be interrupted; both locks stay held until it returns
                        await self._settle(bind)
                        raise
            except asyncio.CancelledError:
                bound = self._backend.is_bound
                self._set_stage(ServiceStage.SESSION_BOUND if bound else ServiceStage.DEVICE_READY)
                if bound:
                    self._publish(STAGE_MODEL_READY)
                raise
            except Exception as exc:
                # Unavailable devices are rejected before the old session is released
                self._set_stage(ServiceStage.SESSION_BOUND if self._backend.is_bound else ServiceStage.DEVICE_READY)
                logger.error("service: bind failed category=%s: %s", classify_error(exc), exc)
                self._publish(STAGE_INIT_FAILED)
                raise

        self._set_stage(ServiceStage.SESSION_BOUND)
        self._publish(STAGE_MODEL_READY)
        return target

    def _run_step(self, encoder: Encoder, text: str) -> Prediction:
        return self._backend.classify(encoder.encode(text))

    def _release_after_run(self, run: asyncio.Future) -> None:
        if not run.cancelled() and run.exception() is not None:
            logger.warning("service: abandoned run failed: %s", run.exception())
        self._session_lock.release()

    async def _run_locked(self, text: str) -> tuple[Prediction, int]:
        await self._session_lock.acquire()
        release_now = True
        try:
            encoder = self._encoder
            if encoder is None or not self._backend.is_bound:
                raise NotInitializedError("analyze called without a bound session")

            t0 = time.perf_counter()
            run = asyncio.ensure_future(asyncio.to_thread(self._run_step, encoder, text))
            try:
                prediction = await asyncio.wait_for(asyncio.shield(run), timeout=self._run_timeout_s)
            except asyncio.TimeoutError:
                release_now = False
                run.add_done_callback(self._release_after_run)
                raise TimeoutError(f"run step exceeded {self._run_timeout_s:.1f}s") from None
            except asyncio.CancelledError:
                release_now = False
                run.add_done_callback(self._release_after_run)
                raise
            elapsed_ms = int(round((time.perf_counter() - t0) * 1000.0))
        finally:
            if release_now:
                self._session_lock.release()
        return prediction, elapsed_ms

    # ============================================================================
    # Public API
    # ============================================================================

    async def pre_initialize(self) -> None:
        """Build the encoder, resolve the model and enumerate devices (once)."""
        if self._stage in (ServiceStage.DEVICE_READY, ServiceStage.SESSION_BOUND):
            return
        async with self._init_lock:
            if self._stage is ServiceStage.UNINITIALIZED:
                await self._pre_initialize_locked()

    async def initialize(self) -> DeviceDescriptor:
        """Drive the service to SESSION_BOUND on the default device."""
        device = self._backend.device
        if self._stage is ServiceStage.SESSION_BOUND and device is not None:
            return device
        async with self._init_lock:
            device = self._backend.device
            if self._stage is ServiceStage.SESSION_BOUND and device is not None:
                return device
            if self._stage is ServiceStage.UNINITIALIZED:
                await self._pre_initialize_locked()
            return await self._bind_locked(None)

    async def list_devices(self) -> tuple[DeviceDescriptor, ...]:
        """Return the enumerated devices, pre-initializing if needed."""
        await self.pre_initialize()
        return self._backend.enumerate_devices()

    async def select_device(self, device: DeviceDescriptor | str) -> DeviceDescriptor:
        """Rebind the session on ``device`` without re-enumerating devices."""
        async with self._init_lock:
            if self._stage is ServiceStage.UNINITIALIZED:
                await self._pre_initialize_locked()
            if self._stage is ServiceStage.SESSION_BOUND:
                self._set_stage(ServiceStage.DEVICE_READY)
            return await self._bind_locked(device)

    async def analyze(self, text: str) -> ClassificationResult:
        """Classify ``text`` into a politeness tier.

        Blank text returns a neutral result immediately without touching the
        backend. Otherwise the service is initialized if needed and one run
        step (encode + forward pass + post-processing) is timed.

        Raises:
            BackendUnavailableError: No usable device during lazy init.
            ModelLoadError: The model could not be loaded during lazy init.
            NotInitializedError: The session vanished after a failed rebind.
            TimeoutError: The run step exceeded the configured timeout.
        """
        if not text or not text.strip():
            return ClassificationResult(
                level=PolitenessLevel.NEUTRAL,
                description=NO_TEXT_DESCRIPTION,
                elapsed_ms=0,
            )

        await self.initialize()
        prediction, elapsed_ms = await self._run_locked(text)
        level = map_to_level(prediction.predicted_class, prediction.confidence, self.threshold)
        logger.debug(
            "service: level=%s class=%d confidence=%.3f ms=%d",
            level.value,
            prediction.predicted_class,
            prediction.confidence,
            elapsed_ms,
        )
        return ClassificationResult(
            level=level,
            description=level.description,
            elapsed_ms=elapsed_ms,
            confidence=prediction.confidence,
        )

    async def shutdown(self) -> None:
        """Release the bound session; devices stay enumerated."""
        async with self._init_lock:
            async with self._session_lock:
                await asyncio.to_thread(self._backend.release)
            if self._stage is ServiceStage.SESSION_BOUND:
                self._set_stage(ServiceStage.DEVICE_READY)


__all__ = ["InferenceService", "ModelResolver"]
