"""Unit tests for ClassifierBackend device resolution and session lifecycle."""

from __future__ import annotations

from pathlib import Path

import pytest

from politeguard.classifier import ClassifierBackend, create_backend, create_runtime
from politeguard.errors import BackendUnavailableError, ModelLoadError, NotInitializedError
from politeguard.state import DeviceDescriptor
from politeguard.tokens import encode
from tests.helpers.fakes import CPU, GPU, FakeRuntime, missing_model_error


def _backend(runtime: FakeRuntime | None = None, **kwargs) -> ClassifierBackend:
    return ClassifierBackend(runtime or FakeRuntime(), "models/test.onnx", **kwargs)


# --- enumeration ---


def test_enumerate_devices_runs_discovery_once() -> None:
    runtime = FakeRuntime()
    backend = _backend(runtime)
    assert backend.enumerate_devices() == (GPU, CPU)
    assert backend.enumerate_devices() == (GPU, CPU)
    assert runtime.discover_calls == 1
    assert runtime.devices_enumerated is True


# --- resolve_device ---


def test_resolve_device_defaults_to_first() -> None:
    assert _backend().resolve_device() == GPU


def test_resolve_device_uses_preferred() -> None:
    assert _backend(preferred_device="cpu").resolve_device() == CPU


def test_resolve_device_matches_name_case_insensitively() -> None:
    backend = _backend()
    assert backend.resolve_device("fake gpu") == GPU
    assert backend.resolve_device("GPU:0") == GPU


def test_resolve_device_rejects_unknown_descriptor() -> None:
    stranger = DeviceDescriptor(backend="fake", device_id="tpu", name="TPU")
    with pytest.raises(BackendUnavailableError) as exc_info:
        _backend().resolve_device(stranger)
    assert exc_info.value.requested == "tpu"
    assert exc_info.value.available == ("gpu:0", "cpu")


def test_resolve_device_rejects_unknown_name() -> None:
    with pytest.raises(BackendUnavailableError):
        _backend().resolve_device("tpu")


def test_resolve_device_without_devices() -> None:
    with pytest.raises(BackendUnavailableError):
        _backend(FakeRuntime(devices=[])).resolve_device()


# --- bind / release ---


def test_bind_opens_session_on_device() -> None:
    runtime = FakeRuntime()
    backend = _backend(runtime)
    assert backend.bind("cpu") == CPU
    assert backend.is_bound
    assert backend.device == CPU
    assert runtime.open_calls == [(CPU, Path("models/test.onnx"))]


def test_rebind_releases_previous_session_first() -> None:
    runtime = FakeRuntime()
    backend = _backend(runtime)
    backend.bind(GPU)
    backend.bind(CPU)
    first, second = runtime.sessions
    assert first.closed is True
    assert second.closed is False
    assert runtime.live_sessions == [second]


def test_bind_unknown_device_keeps_current_session() -> None:
    runtime = FakeRuntime()
    backend = _backend(runtime)
    backend.bind(GPU)
    with pytest.raises(BackendUnavailableError):
        backend.bind("tpu")
    assert backend.device == GPU
    assert runtime.live_sessions == runtime.sessions


def test_bind_failure_leaves_backend_unbound() -> None:
    runtime = FakeRuntime()
    backend = _backend(runtime)
    backend.bind(GPU)
    runtime.open_error = missing_model_error()
    with pytest.raises(ModelLoadError):
        backend.bind(CPU)
    assert backend.is_bound is False
    assert runtime.live_sessions == []


def test_bind_wraps_unexpected_errors() -> None:
    runtime = FakeRuntime(open_error=OSError("driver crashed"))
    backend = _backend(runtime)
    with pytest.raises(ModelLoadError) as exc_info:
        backend.bind()
    assert exc_info.value.model_path == "models/test.onnx"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_release_is_idempotent() -> None:
    backend = _backend()
    backend.release()
    backend.bind()
    backend.release()
    backend.release()
    assert backend.device is None


# --- run / classify ---


def test_run_without_session_raises() -> None:
    with pytest.raises(NotInitializedError):
        _backend().run(encode("hello", 8))


def test_classify_returns_prediction() -> None:
    runtime = FakeRuntime(scores=[0.0, 2.0])
    backend = _backend(runtime)
    backend.bind()
    prediction = backend.classify(encode("go away", 8))
    assert prediction.predicted_class == 1
    assert len(runtime.sessions[0].runs) == 1


def test_run_rejects_empty_scores() -> None:
    backend = _backend(FakeRuntime(scores=[]))
    backend.bind()
    with pytest.raises(RuntimeError):
        backend.run(encode("hello", 8))


# --- factory ---


def test_create_runtime_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        create_runtime("tensorrt")


def test_create_backend_accepts_runtime_override() -> None:
    runtime = FakeRuntime()
    backend = create_backend("m.onnx", runtime=runtime, preferred_device="cpu")
    assert backend.runtime is runtime
    assert backend.model_path == Path("m.onnx")
    assert backend.resolve_device() == CPU
