"""Politeness guard.

Classifies customer-support replies into four politeness tiers while the
author types, without blocking input.

Architecture Overview:
    - tokens/: Fixed-shape text encoder (hashed fallback vocabulary)
    - classifier/: Device enumeration, session binding, scoring (ONNX / torch)
    - analysis/: Inference service, debounce orchestrator, observable view
    - state/: Shared dataclasses and enums
    - errors/: Exception taxonomy
    - config/: Environment-driven configuration
    - runtime/: Application-scoped dependency container
    - selection.py: Suggested-response cursor
    - cli.py: Command-line entry point

Example:
    $ POLITE_MODEL_PATH=models/polite-guard/model.onnx politeguard analyze "Thanks so much!"

Environment Variables:
    - POLITE_MODEL_PATH: ONNX file (onnx) or checkpoint directory (torch)
    - POLITE_BACKEND: 'onnx' or 'torch' (default: 'onnx')
    - POLITE_DEVICE: Preferred device id or name
    - POLITE_DEBOUNCE_MS: Quiet period before inference (default: 800)
"""

__version__ = "0.1.0"
