"""Unit tests for runtime assembly and the command-line entry point."""

from __future__ import annotations

import asyncio
import io

import pytest

from politeguard import cli
from politeguard.runtime import build_runtime_deps
from politeguard.state import PolitenessLevel, ServiceStage
from tests.helpers.fakes import CPU, FakeRuntime, missing_model_error


# --- build_runtime_deps ---


def test_build_runtime_deps_is_lazy() -> None:
    async def _run() -> None:
        runtime = FakeRuntime()
        deps = await build_runtime_deps(runtime=runtime, model_path="m.onnx", debounce_ms=10)
        assert deps.view is deps.analyzer.view
        assert deps.backend.runtime is runtime
        assert deps.service.stage is ServiceStage.UNINITIALIZED
        assert runtime.discover_calls == 0

        result = await deps.service.analyze("Thanks a lot!")
        assert result.level is PolitenessLevel.POLITE

        await deps.shutdown()
        assert runtime.live_sessions == []

    asyncio.run(_run())


def test_build_runtime_deps_overrides() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(scores=[0.0, 1.0])
        deps = await build_runtime_deps(
            runtime=runtime,
            model_path="m.onnx",
            device="cpu",
            max_length=16,
            threshold=0.99,
            warm_up=True,
        )
        await deps.analyzer.start()
        assert deps.service.device == CPU
        assert deps.service.threshold == 0.99

        result = await deps.service.analyze("whatever")
        assert result.level is PolitenessLevel.NEUTRAL
        assert len(runtime.sessions[0].runs[0]) == 16
        await deps.shutdown()

    asyncio.run(_run())


def test_shutdown_during_warm_up_leaves_no_session() -> None:
    async def _run() -> None:
        runtime = FakeRuntime(open_delay_s=0.2)
        deps = await build_runtime_deps(runtime=runtime, model_path="m.onnx", warm_up=True)
        await asyncio.sleep(0.05)
        await deps.shutdown()
        assert len(runtime.open_calls) == 1
        assert runtime.live_sessions == []
        assert deps.service.device is None

    asyncio.run(_run())


# --- cli ---


def _patch_runtime(monkeypatch: pytest.MonkeyPatch, runtime: FakeRuntime) -> None:
    async def _build(**kwargs):
        return await build_runtime_deps(runtime=runtime, **kwargs)

    monkeypatch.setattr(cli, "build_runtime_deps", _build)


def test_cli_devices(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _patch_runtime(monkeypatch, FakeRuntime())
    assert cli.main(["devices", "--model", "m.onnx"]) == 0
    out = capsys.readouterr().out
    assert "Fake GPU" in out
    assert "fake:cpu" in out


def test_cli_analyze(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _patch_runtime(monkeypatch, FakeRuntime())
    assert cli.main(["analyze", "--model", "m.onnx", "--device", "cpu", "Thank you!", "  "]) == 0
    out = capsys.readouterr().out
    assert "device: CPU (fake:cpu)" in out
    assert "Polite" in out
    assert "no text to analyze" in out


def test_cli_reports_load_failure(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _patch_runtime(monkeypatch, FakeRuntime(open_error=missing_model_error()))
    assert cli.main(["analyze", "--model", "missing.onnx", "hello"]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_watch(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _patch_runtime(monkeypatch, FakeRuntime())
    monkeypatch.setattr("sys.stdin", io.StringIO("hello\n\nthanks\n"))
    assert cli.main(["watch", "--model", "m.onnx", "--debounce-ms", "0"]) == 0
    out = capsys.readouterr().out
    assert "gen=3" in out
    assert "level=Polite" in out
