"""Politeness classifier model configuration.

The classifier is a two-class sequence model (index 0 = polite,
index 1 = impolite) exported either to ONNX or kept as a HuggingFace
checkpoint directory for the PyTorch runtime.

Decision Flow:
    1. Text is encoded to fixed-length id/mask sequences
    2. The bound session runs one forward pass
    3. Softmax over the two logits gives class probabilities
    4. The winning class and its probability pick one of four tiers

Environment Variables:
    POLITE_MODEL_PATH: ONNX file or checkpoint directory
    POLITE_BACKEND: Runtime kind, 'onnx' or 'torch' (default: onnx)
    POLITE_DEVICE: Preferred device id or name (default: first enumerated)
    POLITE_CONFIDENCE_THRESHOLD: Upper-band cutoff (default: 0.8)
    POLITE_COMPILE: Enable torch.compile for the torch runtime (default: False)
    POLITE_ORT_LOG_SEVERITY: onnxruntime log severity, 0-4 (default: 3)
"""

from __future__ import annotations

import os

from ..helpers.env import env_flag, env_float, env_int


# ============================================================================
# Artifact & Runtime
# ============================================================================

POLITE_MODEL_PATH = os.getenv("POLITE_MODEL_PATH", "models/polite-guard/model.onnx")
POLITE_BACKEND = (os.getenv("POLITE_BACKEND", "onnx") or "onnx").strip().lower()
POLITE_DEVICE = (os.getenv("POLITE_DEVICE") or "").strip() or None

SUPPORTED_BACKENDS = ("onnx", "torch")

# ============================================================================
# Decision Threshold
# ============================================================================
# Confidence strictly above the threshold lands in the extreme tier
# (Polite / Impolite); at or below it lands in the softer tier.

POLITE_CONFIDENCE_THRESHOLD = env_float("POLITE_CONFIDENCE_THRESHOLD", 0.8)

POLITE_CLASS_INDEX = 0
IMPOLITE_CLASS_INDEX = 1

# ============================================================================
# Runtime Tuning
# ============================================================================

POLITE_COMPILE = env_flag("POLITE_COMPILE", False)
POLITE_ORT_LOG_SEVERITY = env_int("POLITE_ORT_LOG_SEVERITY", 3)


__all__ = [
    "POLITE_MODEL_PATH",
    "POLITE_BACKEND",
    "POLITE_DEVICE",
    "SUPPORTED_BACKENDS",
    "POLITE_CONFIDENCE_THRESHOLD",
    "POLITE_CLASS_INDEX",
    "IMPOLITE_CLASS_INDEX",
    "POLITE_COMPILE",
    "POLITE_ORT_LOG_SEVERITY",
]
