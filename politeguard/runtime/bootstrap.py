"""Runtime dependency bootstrap.

Builds the backend, inference service and debounce orchestrator from
config values (each overridable by the caller). Nothing is loaded here:
initialization happens lazily on first analysis, or eagerly when the
caller passes ``warm_up=True``.
"""

from __future__ import annotations

from pathlib import Path

from politeguard.analysis import DebouncedAnalyzer, InferenceService, ModelResolver
from politeguard.classifier import ClassifierRuntime, create_backend
from politeguard.config import (
    POLITE_BACKEND,
    POLITE_CONFIDENCE_THRESHOLD,
    POLITE_DEBOUNCE_MS,
    POLITE_DEVICE,
    POLITE_MAX_LENGTH,
    POLITE_MODEL_PATH,
)
from politeguard.tokens import Encoder

from .dependencies import RuntimeDeps


async def build_runtime_deps(
    *,
    model_path: str | Path | None = None,
    backend_kind: str | None = None,
    device: str | None = None,
    debounce_ms: float | None = None,
    max_length: int | None = None,
    threshold: float | None = None,
    runtime: ClassifierRuntime | None = None,
    model_resolver: ModelResolver | None = None,
    warm_up: bool = False,
) -> RuntimeDeps:
    """Assemble the analysis stack. Must run inside an event loop."""
    backend = create_backend(
        model_path or POLITE_MODEL_PATH,
        kind=backend_kind or POLITE_BACKEND,
        preferred_device=device or POLITE_DEVICE,
        runtime=runtime,
    )
    length = max_length or POLITE_MAX_LENGTH
    service = InferenceService(
        backend,
        encoder_factory=lambda: Encoder(length),
        model_resolver=model_resolver,
        threshold=POLITE_CONFIDENCE_THRESHOLD if threshold is None else threshold,
    )
    analyzer = DebouncedAnalyzer(
        service,
        debounce_ms=POLITE_DEBOUNCE_MS if debounce_ms is None else debounce_ms,
    )
    if warm_up:
        analyzer.start()
    return RuntimeDeps(backend=backend, service=service, analyzer=analyzer)


__all__ = ["build_runtime_deps"]
