"""ONNX Runtime classifier backend.

Devices are the execution providers compiled into the installed
onnxruntime build (CUDA, DirectML, CoreML, CPU, ...), in the library's
priority order. A session binds exactly one provider.

The exported model is expected to take ``input_ids``, ``attention_mask``
and optionally ``token_type_ids`` as int64 tensors of shape (1, L) and to
return logits of shape (1, 2) as its first output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import onnxruntime as ort  # type: ignore[import]

from ..config.model import POLITE_ORT_LOG_SEVERITY
from ..errors import ModelLoadError
from ..state import DeviceDescriptor, EncodedInput
from .runtime import ClassifierRuntime, ClassifierSession

logger = logging.getLogger(__name__)

# Remote-inference providers that cannot host a local session.
_SKIPPED_PROVIDERS = frozenset({"AzureExecutionProvider"})

_FEED_NAMES = ("input_ids", "attention_mask", "token_type_ids")


def provider_display_name(provider: str) -> str:
    """'CUDAExecutionProvider' -> 'CUDA'."""
    name = provider.removesuffix("ExecutionProvider")
    return name or provider


class OnnxClassifierSession(ClassifierSession):
    """InferenceSession bound to a single execution provider."""

    def __init__(self, device: DeviceDescriptor, model_path: Path, *, log_severity: int = POLITE_ORT_LOG_SEVERITY) -> None:
        self.device = device
        options = ort.SessionOptions()
        options.log_severity_level = int(log_severity)
        try:
            self._session = ort.InferenceSession(
                str(model_path),
                sess_options=options,
                providers=[device.device_id],
            )
        except Exception as exc:  # noqa: BLE001
            raise ModelLoadError(
                f"onnxruntime could not load {model_path}: {exc}",
                model_path=str(model_path),
            ) from exc
        self._input_names = {item.name for item in self._session.get_inputs()}
        missing = {"input_ids", "attention_mask"} - self._input_names
        if missing:
            raise ModelLoadError(
                f"model {model_path} is missing required inputs: {sorted(missing)}",
                model_path=str(model_path),
            )

    def _build_feeds(self, encoded: EncodedInput) -> dict[str, np.ndarray]:
        columns = {
            "input_ids": encoded.input_ids,
            "attention_mask": encoded.attention_mask,
            "token_type_ids": encoded.token_type_ids,
        }
        return {
            name: np.asarray([columns[name]], dtype=np.int64)
            for name in _FEED_NAMES
            if name in self._input_names
        }

    def run(self, encoded: EncodedInput) -> list[float]:
        if self._session is None:
            raise RuntimeError("onnx session already closed")
        outputs = self._session.run(None, self._build_feeds(encoded))
        return np.asarray(outputs[0], dtype=np.float64).reshape(-1).tolist()

    def close(self) -> None:
        # InferenceSession frees its arena when the last reference goes away
        self._session = None


class OnnxClassifierRuntime(ClassifierRuntime):
    """Execution-provider enumeration and session construction."""

    kind = "onnx"

    def __init__(self, *, log_severity: int = POLITE_ORT_LOG_SEVERITY) -> None:
        super().__init__()
        self._log_severity = log_severity
        ort.set_default_logger_severity(int(log_severity))

    def _discover_devices(self) -> list[DeviceDescriptor]:
        providers = [p for p in ort.get_available_providers() if p not in _SKIPPED_PROVIDERS]
        logger.info("classifier: onnxruntime %s providers=%s", ort.__version__, providers)
        return [
            DeviceDescriptor(backend=self.kind, device_id=provider, name=provider_display_name(provider))
            for provider in providers
        ]

    def open_session(self, device: DeviceDescriptor, model_path: Path) -> ClassifierSession:
        if not model_path.is_file():
            raise ModelLoadError(f"ONNX model not found at {model_path}", model_path=str(model_path))
        return OnnxClassifierSession(device, model_path, log_severity=self._log_severity)


__all__ = [
    "OnnxClassifierRuntime",
    "OnnxClassifierSession",
    "provider_display_name",
]
