"""Unit tests for InferenceService lazy initialization and analysis."""

from __future__ import annotations

import asyncio
import threading
import time
from pathlib import Path

import pytest

from politeguard.analysis import InferenceService
from politeguard.classifier import ClassifierBackend
from politeguard.errors import BackendUnavailableError, ModelLoadError
from politeguard.state import PolitenessLevel, ServiceStage
from tests.helpers.fakes import CPU, GPU, FakeRuntime, missing_model_error


def _service(runtime: FakeRuntime, **kwargs) -> InferenceService:
    backend = ClassifierBackend(runtime, "models/test.onnx")
    return InferenceService(backend, **kwargs)


# --- blank text ---


def test_blank_text_short_circuits_without_init() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        service = _service(runtime)
        for text in ("", "   ", "\n\t"):
            result = await service.analyze(text)
            assert result.level is PolitenessLevel.NEUTRAL
            assert result.description == "no text to analyze"
            assert result.elapsed_ms == 0
            assert result.confidence is None
        assert runtime.discover_calls == 0
        assert runtime.open_calls == []
        assert service.stage is ServiceStage.UNINITIALIZED

    asyncio.run(_run())


# --- lazy initialization ---


def test_analyze_initializes_lazily() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(scores=[3.0, 0.0])
        service = _service(runtime)
        result = await service.analyze("Thank you so much!")
        assert result.level is PolitenessLevel.POLITE
        assert result.description == PolitenessLevel.POLITE.description
        assert result.elapsed_ms >= 0
        assert result.confidence == pytest.approx(0.9526, abs=1e-4)
        assert service.stage is ServiceStage.SESSION_BOUND
        assert service.device == GPU

    asyncio.run(_run())


def test_concurrent_first_calls_initialize_once() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(discover_delay_s=0.05, open_delay_s=0.05)
        service = _service(runtime)
        results = await asyncio.gather(*(service.analyze(f"hello {i}") for i in range(5)))
        assert len(results) == 5
        assert runtime.discover_calls == 1
        assert len(runtime.open_calls) == 1
        assert len(runtime.sessions[0].runs) == 5

    asyncio.run(_run())


def test_initialize_publishes_stages_in_order() -> None:
    async def _run() -> None:
        service = _service(FakeRuntime())
        seen: list[str] = []
        service.status.subscribe(seen.append)
        device = await service.initialize()
        assert device == GPU
        assert seen == [
            "Loading tokenizer...",
            "Enumerating devices...",
            "Ready for device selection",
            "Loading model with Fake GPU...",
            "Model ready",
        ]
        assert service.status.latest == "Model ready"

    asyncio.run(_run())


def test_pre_initialize_stops_at_device_ready() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        service = _service(runtime)
        await service.pre_initialize()
        await service.pre_initialize()
        assert service.stage is ServiceStage.DEVICE_READY
        assert runtime.discover_calls == 1
        assert runtime.open_calls == []
        assert await service.list_devices() == (GPU, CPU)

    asyncio.run(_run())


def test_model_resolver_runs_before_enumeration(tmp_path: Path) -> None:
    async def _run() -> None:
        resolved = tmp_path / "cached.onnx"
        runtime = FakeRuntime()
        service = _service(runtime, model_resolver=lambda: resolved)
        seen: list[str] = []
        service.status.subscribe(seen.append)
        await service.initialize()
        assert "Resolving model..." in seen
        assert seen.index("Resolving model...") < seen.index("Enumerating devices...")
        assert runtime.open_calls == [(GPU, resolved)]

    asyncio.run(_run())


def test_model_resolver_failure_is_model_load_error() -> None:
    def _resolver() -> Path:
        raise OSError("download failed")

    async def _run() -> None:
        service = _service(FakeRuntime(), model_resolver=_resolver)
        with pytest.raises(ModelLoadError):
            await service.initialize()
        assert service.stage is ServiceStage.UNINITIALIZED
        assert service.status.latest == "Initialization failed"

    asyncio.run(_run())


# --- failures and retry ---


def test_load_failure_allows_retry() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(open_error=missing_model_error())
        service = _service(runtime)
        with pytest.raises(ModelLoadError):
            await service.analyze("hello")
        assert service.stage is ServiceStage.DEVICE_READY
        assert service.status.latest == "Initialization failed"

        runtime.open_error = None
        result = await service.analyze("hello")
        assert result.level is PolitenessLevel.POLITE
        assert runtime.discover_calls == 1
        assert service.stage is ServiceStage.SESSION_BOUND

    asyncio.run(_run())


def test_discovery_failure_resets_to_uninitialized() -> None:
    class _BrokenRuntime(FakeRuntime):
        def _discover_devices(self):
            raise RuntimeError("no driver")

    async def _run() -> None:
        service = _service(_BrokenRuntime())
        with pytest.raises(RuntimeError):
            await service.pre_initialize()
        assert service.stage is ServiceStage.UNINITIALIZED

    asyncio.run(_run())


def test_no_devices_is_backend_unavailable() -> None:
    async def _run() -> None:
        service = _service(FakeRuntime(devices=[]))
        with pytest.raises(BackendUnavailableError):
            await service.analyze("hello")

    asyncio.run(_run())


# --- device selection ---


def test_select_device_rebinds_without_reenumerating() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        service = _service(runtime)
        await service.analyze("hello")
        assert await service.select_device("cpu") == CPU
        assert service.device == CPU
        assert service.stage is ServiceStage.SESSION_BOUND
        assert runtime.discover_calls == 1
        assert [s.closed for s in runtime.sessions] == [True, False]

        await service.analyze("hello again")
        assert len(runtime.sessions[1].runs) == 1

    asyncio.run(_run())


def test_select_unavailable_device_keeps_session() -> None:
    async def _run() -> None:
        service = _service(FakeRuntime())
        await service.initialize()
        with pytest.raises(BackendUnavailableError):
            await service.select_device("tpu")
        assert service.device == GPU
        assert service.stage is ServiceStage.SESSION_BOUND

    asyncio.run(_run())


def test_select_device_before_init_runs_pre_initialization() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        service = _service(runtime)
        assert await service.select_device(CPU) == CPU
        assert runtime.open_calls[0][0] == CPU

    asyncio.run(_run())


def test_rebind_waits_for_inflight_run() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(run_delay_s=0.1)
        service = _service(runtime)
        await service.initialize()
        running = asyncio.create_task(service.analyze("slow"))
        await asyncio.sleep(0.02)
        await service.select_device("cpu")
        result = await running
        assert result.level is PolitenessLevel.POLITE
        assert len(runtime.sessions[0].runs) == 1

    asyncio.run(_run())


# --- timeout ---


def test_run_timeout_raises_and_later_runs_succeed() -> None:
    first_call = threading.Event()

    def _scores(_encoded) -> list[float]:
        if not first_call.is_set():
            first_call.set()
            time.sleep(0.2)
        return [3.0, 0.0]

    async def _run() -> None:
        service = _service(FakeRuntime(scores=_scores), run_timeout_s=0.05)
        await service.initialize()
        with pytest.raises(TimeoutError):
            await service.analyze("stuck")
        result = await service.analyze("fine")
        assert result.level is PolitenessLevel.POLITE

    asyncio.run(_run())


# --- cancellation during bind ---


def test_cancelled_bind_finishes_before_next_initialize() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(open_delay_s=0.2)
        service = _service(runtime)
        first = asyncio.create_task(service.initialize())
        await asyncio.sleep(0.05)
        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first
        assert service.stage is ServiceStage.SESSION_BOUND

        assert await service.initialize() == GPU
        assert len(runtime.open_calls) == 1
        assert len(runtime.live_sessions) == 1

    asyncio.run(_run())


def test_second_initialize_waits_for_cancelled_bind() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(open_delay_s=0.2)
        service = _service(runtime)
        first = asyncio.create_task(service.initialize())
        await asyncio.sleep(0.05)
        first.cancel()
        second = asyncio.create_task(service.initialize())
        await asyncio.gather(first, second, return_exceptions=True)
        assert second.result() == GPU
        assert len(runtime.open_calls) == 1
        assert len(runtime.live_sessions) == 1

    asyncio.run(_run())


def test_shutdown_after_cancelled_bind_releases_session() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(open_delay_s=0.2)
        service = _service(runtime)
        warm_up = asyncio.create_task(service.initialize())
        await asyncio.sleep(0.05)
        warm_up.cancel()
        await service.shutdown()
        assert runtime.live_sessions == []
        assert service.device is None
        assert service.stage is ServiceStage.DEVICE_READY

    asyncio.run(_run())


# --- shutdown ---


def test_shutdown_releases_session() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        service = _service(runtime)
        await service.initialize()
        await service.shutdown()
        assert runtime.live_sessions == []
        assert service.device is None
        assert service.stage is ServiceStage.DEVICE_READY

    asyncio.run(_run())
