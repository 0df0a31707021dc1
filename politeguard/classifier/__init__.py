"""Classifier package for politeness tier detection.

This package turns encoded text into one of four politeness tiers using a
two-class (polite / impolite) sequence classifier.

Architecture:
    ClassifierBackend:
        Session lifecycle:
        - Device resolution (explicit, preferred, or first enumerated)
        - Single live session; rebind releases before loading
        - Forward pass + softmax/argmax post-processing

    OnnxClassifierRuntime:
        onnxruntime execution providers as devices

    TorchClassifierRuntime:
        CUDA / MPS / CPU torch devices with a transformers checkpoint

    scoring:
        softmax, argmax (ties -> lower index), confidence-gated tier mapping

Configuration (via environment):
    POLITE_MODEL_PATH: ONNX file or checkpoint directory
    POLITE_BACKEND: 'onnx' or 'torch'
    POLITE_DEVICE: Preferred device id or name
    POLITE_CONFIDENCE_THRESHOLD: Upper-band cutoff (default 0.8)

Usage:
    from politeguard.classifier import create_backend, map_to_level

    backend = create_backend()
    backend.bind()
    prediction = backend.classify(encoded)
    level = map_to_level(prediction.predicted_class, prediction.confidence)
"""

from __future__ import annotations

from .backend import ClassifierBackend
from .factory import create_backend, create_runtime
from .runtime import ClassifierRuntime, ClassifierSession
from .scoring import argmax, map_to_level, predict, softmax

__all__ = [
    "ClassifierBackend",
    "ClassifierRuntime",
    "ClassifierSession",
    "argmax",
    "create_backend",
    "create_runtime",
    "map_to_level",
    "predict",
    "softmax",
]
