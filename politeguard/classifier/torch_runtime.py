"""PyTorch classifier backend.

This module loads a HuggingFace sequence-classification checkpoint
directory and runs it on one torch device. It handles:

1. Device Enumeration:
   - Every visible CUDA device, then Apple MPS, then CPU
   - Display names from torch.cuda.get_device_name

2. Model Loading:
   - AutoModelForSequenceClassification from a local directory
   - float16 on CUDA, float32 elsewhere
   - Optional torch.compile() optimization

3. Inference:
   - Pre-encoded ids/masks as torch.long tensors
   - token_type_ids only for architectures that accept them
   - torch.inference_mode() for efficiency
"""

from __future__ import annotations

import gc
import inspect
import logging
from pathlib import Path

import torch
from transformers import AutoModelForSequenceClassification

from ..config.model import POLITE_COMPILE
from ..errors import ModelLoadError
from ..state import DeviceDescriptor, EncodedInput
from .runtime import ClassifierRuntime, ClassifierSession

logger = logging.getLogger(__name__)


def _mps_available() -> bool:
    mps = getattr(torch.backends, "mps", None)
    return bool(mps is not None and mps.is_available())


class TorchClassifierSession(ClassifierSession):
    """Sequence-classification model resident on one torch device.

    Attributes:
        device: Descriptor the session was bound to.
    """

    def __init__(self, device: DeviceDescriptor, model_path: Path, *, compile_model: bool = POLITE_COMPILE) -> None:
        self.device = device
        self._torch_device = torch.device(device.device_id)
        self._dtype = torch.float16 if self._torch_device.type == "cuda" else torch.float32

        try:
            model = AutoModelForSequenceClassification.from_pretrained(
                str(model_path),
                torch_dtype=self._dtype if self._torch_device.type == "cuda" else None,
            )
        except Exception as exc:  # noqa: BLE001
            raise ModelLoadError(
                f"transformers could not load {model_path}: {exc}",
                model_path=str(model_path),
            ) from exc

        model = model.to(device=self._torch_device, dtype=self._dtype).eval()
        self._accepts_token_types = "token_type_ids" in inspect.signature(model.forward).parameters

        if self._torch_device.type == "cuda":
            torch.backends.cuda.matmul.allow_tf32 = True
            torch.backends.cudnn.benchmark = True

        if compile_model and hasattr(torch, "compile"):
            try:
                model = torch.compile(model)
                logger.info("classifier: enabled torch.compile for %s", model_path)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "classifier: torch.compile failed, running eager: %s",
                    exc,
                )
        self._model = model

    def _tensor(self, values: tuple[int, ...]) -> torch.Tensor:
        return torch.tensor([values], dtype=torch.long, device=self._torch_device)

    def run(self, encoded: EncodedInput) -> list[float]:
        model = self._model
        if model is None:
            raise RuntimeError("torch session already closed")
        inputs = {
            "input_ids": self._tensor(encoded.input_ids),
            "attention_mask": self._tensor(encoded.attention_mask),
        }
        if self._accepts_token_types:
            inputs["token_type_ids"] = self._tensor(encoded.token_type_ids)

        with torch.inference_mode():
            outputs = model(**inputs)
        return outputs.logits[0].float().cpu().tolist()

    def close(self) -> None:
        if self._model is None:
            return
        self._model = None
        gc.collect()
        if self._torch_device.type == "cuda" and torch.cuda.is_available():
            torch.cuda.empty_cache()


class TorchClassifierRuntime(ClassifierRuntime):
    """torch device enumeration and checkpoint loading."""

    kind = "torch"

    def __init__(self, *, compile_model: bool = POLITE_COMPILE) -> None:
        super().__init__()
        self._compile_model = compile_model

    def _discover_devices(self) -> list[DeviceDescriptor]:
        devices: list[DeviceDescriptor] = []
        if torch.cuda.is_available():
            for index in range(torch.cuda.device_count()):
                devices.append(
                    DeviceDescriptor(
                        backend=self.kind,
                        device_id=f"cuda:{index}",
                        name=torch.cuda.get_device_name(index),
                    )
                )
        if _mps_available():
            devices.append(DeviceDescriptor(backend=self.kind, device_id="mps", name="Apple MPS"))
        devices.append(DeviceDescriptor(backend=self.kind, device_id="cpu", name="CPU"))
        logger.info("classifier: torch %s devices=%s", torch.__version__, [d.device_id for d in devices])
        return devices

    def open_session(self, device: DeviceDescriptor, model_path: Path) -> ClassifierSession:
        if not model_path.is_dir():
            raise ModelLoadError(f"checkpoint directory not found at {model_path}", model_path=str(model_path))
        return TorchClassifierSession(device, model_path, compile_model=self._compile_model)


__all__ = ["TorchClassifierRuntime", "TorchClassifierSession"]
