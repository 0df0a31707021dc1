"""Factory functions for classifier runtimes and backends.

Runtime modules import their compute library at module load, so they are
imported here only for the runtime kind actually requested.
"""

from __future__ import annotations

from pathlib import Path

from ..config.model import POLITE_BACKEND, POLITE_DEVICE, POLITE_MODEL_PATH, SUPPORTED_BACKENDS
from .backend import ClassifierBackend
from .runtime import ClassifierRuntime


def create_runtime(kind: str = POLITE_BACKEND) -> ClassifierRuntime:
    """Create a runtime for ``kind`` ('onnx' or 'torch')."""
    normalized = (kind or "").strip().lower()
    if normalized not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported classifier backend: {kind!r} (expected one of {SUPPORTED_BACKENDS})")
    if normalized == "onnx":
        from .onnx_runtime import OnnxClassifierRuntime  # noqa: PLC0415

        return OnnxClassifierRuntime()
    from .torch_runtime import TorchClassifierRuntime  # noqa: PLC0415

    return TorchClassifierRuntime()


def create_backend(
    model_path: str | Path = POLITE_MODEL_PATH,
    *,
    kind: str = POLITE_BACKEND,
    preferred_device: str | None = POLITE_DEVICE,
    runtime: ClassifierRuntime | None = None,
) -> ClassifierBackend:
    """Create an unbound ClassifierBackend using config values by default."""
    return ClassifierBackend(
        runtime or create_runtime(kind),
        model_path,
        preferred_device=preferred_device,
    )


__all__ = ["create_runtime", "create_backend"]
